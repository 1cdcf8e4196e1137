"""
SQLite implementation of Comment repository.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from issue_tracker.core.exceptions import NotFoundError
from issue_tracker.infrastructure.local.database import CommentORM, IssueORM
from issue_tracker.interfaces.comment_repository import ICommentRepository
from issue_tracker.models.comment import Comment, CommentCreate
from issue_tracker.utils.ids import new_object_id


class SqliteCommentRepository(ICommentRepository):
    """SQLite implementation of comment repository."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def _orm_to_model(self, orm: CommentORM) -> Comment:
        return Comment(
            id=orm.id,
            issue_id=orm.issue_id,
            author_id=orm.author_id,
            content=orm.content,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def _ensure_issue(self, session: AsyncSession, issue_id: str) -> None:
        result = await session.execute(select(IssueORM.id).where(IssueORM.id == issue_id))
        if result.scalar_one_or_none() is None:
            raise NotFoundError(f"Issue {issue_id} not found")

    async def create(self, issue_id: str, author_id: str, comment: CommentCreate) -> Comment:
        """Create a new comment on an issue."""
        async with self._session_factory() as session:
            await self._ensure_issue(session, issue_id)
            orm = CommentORM(
                id=new_object_id(),
                issue_id=issue_id,
                author_id=author_id,
                content=comment.content.strip(),
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_by_issue(self, issue_id: str) -> list[Comment]:
        """List comments for an issue, ordered by created_at DESC."""
        async with self._session_factory() as session:
            await self._ensure_issue(session, issue_id)
            result = await session.execute(
                select(CommentORM)
                .where(CommentORM.issue_id == issue_id)
                .order_by(CommentORM.created_at.desc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def count_by_issues(self, issue_ids: Iterable[str]) -> dict[str, int]:
        ids = set(issue_ids)
        if not ids:
            return {}
        async with self._session_factory() as session:
            result = await session.execute(
                select(CommentORM.issue_id, func.count(CommentORM.id))
                .where(CommentORM.issue_id.in_(ids))
                .group_by(CommentORM.issue_id)
            )
            return {issue_id: count for issue_id, count in result.all()}

    async def delete_by_issue(self, issue_id: str) -> int:
        """Delete all comments for an issue."""
        async with self._session_factory() as session:
            result = await session.execute(
                delete(CommentORM).where(CommentORM.issue_id == issue_id)
            )
            await session.commit()
            return result.rowcount or 0
