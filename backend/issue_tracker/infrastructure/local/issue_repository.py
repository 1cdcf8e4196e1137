"""
SQLite implementation of Issue repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, func, select

from issue_tracker.core.exceptions import NotFoundError
from issue_tracker.core.logger import setup_logger
from issue_tracker.infrastructure.local.database import CommentORM, IssueORM
from issue_tracker.interfaces.comment_repository import ICommentRepository
from issue_tracker.interfaces.issue_repository import IIssueRepository
from issue_tracker.models.enums import IssuePriority, IssueStatus
from issue_tracker.models.issue import Issue, IssueCreate, IssueUpdate
from issue_tracker.utils.datetime_utils import now_utc
from issue_tracker.utils.ids import new_object_id

logger = setup_logger(__name__)


class SqliteIssueRepository(IIssueRepository):
    """SQLite implementation of issue repository."""

    def __init__(self, session_factory, comment_repo: ICommentRepository):
        self._session_factory = session_factory
        self._comment_repo = comment_repo

    def _orm_to_model(self, orm: IssueORM) -> Issue:
        """Convert ORM object to Pydantic model."""
        return Issue(
            id=orm.id,
            title=orm.title,
            description=orm.description or "",
            status=IssueStatus(orm.status),
            priority=IssuePriority(orm.priority),
            assignee=orm.assignee or "",
            author_id=orm.author_id,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def create(self, author_id: str, issue: IssueCreate) -> Issue:
        """Create a new issue."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = IssueORM(
                id=new_object_id(),
                title=issue.title,
                description=issue.description,
                status=issue.status.value,
                priority=issue.priority.value,
                assignee=issue.assignee,
                author_id=author_id,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, issue_id: str) -> Optional[Issue]:
        """Get an issue by ID."""
        async with self._session_factory() as session:
            result = await session.execute(select(IssueORM).where(IssueORM.id == issue_id))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        author_id: Optional[str] = None,
        status: Optional[IssueStatus] = None,
        priority: Optional[IssuePriority] = None,
    ) -> list[Issue]:
        """List issues, newest first."""
        async with self._session_factory() as session:
            query = select(IssueORM)
            if author_id:
                query = query.where(IssueORM.author_id == author_id)
            if status:
                query = query.where(IssueORM.status == status.value)
            if priority:
                query = query.where(IssueORM.priority == priority.value)
            query = query.order_by(IssueORM.created_at.desc())

            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(self, issue_id: str, update: IssueUpdate) -> Issue:
        """Update the fields present in the patch."""
        async with self._session_factory() as session:
            result = await session.execute(select(IssueORM).where(IssueORM.id == issue_id))
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(f"Issue {issue_id} not found")

            for field, value in update.changes().items():
                if isinstance(value, (IssueStatus, IssuePriority)):
                    value = value.value
                setattr(orm, field, value)
            orm.updated_at = now_utc()

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, issue_id: str) -> bool:
        """Delete an issue, then its comments."""
        async with self._session_factory() as session:
            result = await session.execute(delete(IssueORM).where(IssueORM.id == issue_id))
            await session.commit()
            if not result.rowcount:
                return False

        # The issue row is already gone; a failure here leaves orphaned comments
        # but never brings the issue back.
        try:
            removed = await self._comment_repo.delete_by_issue(issue_id)
        except Exception:
            logger.exception("Cascade delete of comments failed for issue %s", issue_id)
            raise
        logger.info("Deleted issue %s and %d comment(s)", issue_id, removed)
        return True

    async def count_by_status(self, author_id: Optional[str] = None) -> dict[IssueStatus, int]:
        async with self._session_factory() as session:
            query = select(IssueORM.status, func.count(IssueORM.id)).group_by(IssueORM.status)
            if author_id:
                query = query.where(IssueORM.author_id == author_id)
            result = await session.execute(query)
            return {IssueStatus(status): count for status, count in result.all()}

    async def count_by_priority(self) -> dict[IssuePriority, int]:
        async with self._session_factory() as session:
            query = select(IssueORM.priority, func.count(IssueORM.id)).group_by(IssueORM.priority)
            result = await session.execute(query)
            return {IssuePriority(priority): count for priority, count in result.all()}

    async def delete_all(self) -> int:
        async with self._session_factory() as session:
            await session.execute(delete(CommentORM))
            result = await session.execute(delete(IssueORM))
            await session.commit()
            return result.rowcount or 0
