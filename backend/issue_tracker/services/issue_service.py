"""
Issue service.

Composes the issue, comment and user repositories into the operations exposed
at the HTTP boundary. Every operation runs on behalf of an already
authenticated user. Identifiers are format-checked here, before any
repository is called, so a malformed id is always a BadRequestError and never
a NotFoundError.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from issue_tracker.core.exceptions import NotFoundError
from issue_tracker.core.logger import setup_logger
from issue_tracker.interfaces.auth_provider import User
from issue_tracker.interfaces.comment_repository import ICommentRepository
from issue_tracker.interfaces.issue_repository import IIssueRepository
from issue_tracker.interfaces.user_repository import IUserRepository
from issue_tracker.models.comment import Comment, CommentCreate, CommentView
from issue_tracker.models.enums import IssuePriority, IssueStatus
from issue_tracker.models.issue import (
    Issue,
    IssueCreate,
    IssueOverview,
    IssueStats,
    IssueUpdate,
    IssueView,
)
from issue_tracker.models.user import AuthorSummary
from issue_tracker.services.issue_permissions import MutationPolicy, PermissiveMutationPolicy
from issue_tracker.utils.datetime_utils import now_utc
from issue_tracker.utils.ids import ensure_object_id
from issue_tracker.utils.validation import validate_model

logger = setup_logger(__name__)


class IssueService:
    """Authorization-scoped access to issues and their comments."""

    def __init__(
        self,
        issue_repo: IIssueRepository,
        comment_repo: ICommentRepository,
        user_repo: IUserRepository,
        mutation_policy: Optional[MutationPolicy] = None,
    ):
        self._issues = issue_repo
        self._comments = comment_repo
        self._users = user_repo
        self._policy = mutation_policy or PermissiveMutationPolicy()

    # ============================================
    # Joins
    # ============================================

    async def _authors(self, author_ids: set[str]) -> dict[str, AuthorSummary]:
        users = await self._users.get_many(author_ids)
        return {user_id: user.to_author() for user_id, user in users.items()}

    async def _to_views(self, issues: Sequence[Issue]) -> list[IssueView]:
        if not issues:
            return []
        authors = await self._authors({issue.author_id for issue in issues})
        counts = await self._comments.count_by_issues([issue.id for issue in issues])
        now = now_utc()
        return [
            IssueView.build(
                issue,
                authors.get(issue.author_id),
                comment_count=counts.get(issue.id, 0),
                now=now,
            )
            for issue in issues
        ]

    async def _to_view(self, issue: Issue) -> IssueView:
        views = await self._to_views([issue])
        return views[0]

    async def _comment_views(self, comments: Sequence[Comment]) -> list[CommentView]:
        authors = await self._authors({comment.author_id for comment in comments})
        return [CommentView.build(comment, authors.get(comment.author_id)) for comment in comments]

    async def _require_issue(self, issue_id: str) -> Issue:
        issue = await self._issues.get(issue_id)
        if not issue:
            raise NotFoundError("Issue not found")
        return issue

    # ============================================
    # Reads
    # ============================================

    async def list_all_issues(
        self,
        status: Optional[IssueStatus] = None,
        priority: Optional[IssuePriority] = None,
    ) -> list[IssueView]:
        """Every issue, newest first."""
        issues = await self._issues.list(status=status, priority=priority)
        return await self._to_views(issues)

    async def list_my_issues(self, user_id: str) -> list[IssueView]:
        """Issues authored by ``user_id``, newest first."""
        issues = await self._issues.list(author_id=user_id)
        return await self._to_views(issues)

    async def my_statistics(self, user_id: str) -> IssueStats:
        counts = await self._issues.count_by_status(author_id=user_id)
        return IssueStats.from_counts(counts)

    async def issue_overview(self) -> IssueOverview:
        by_status = await self._issues.count_by_status()
        by_priority = await self._issues.count_by_priority()
        return IssueOverview.from_counts(by_status, by_priority)

    async def get_issue(self, issue_id: str) -> IssueView:
        issue_id = ensure_object_id(issue_id)
        return await self._to_view(await self._require_issue(issue_id))

    # ============================================
    # Writes
    # ============================================

    async def create_issue(
        self, fields: IssueCreate | Mapping[str, Any], user_id: str
    ) -> IssueView:
        """Create an issue authored by ``user_id``, whatever author the caller sent."""
        draft = validate_model(IssueCreate, fields)
        issue = await self._issues.create(user_id, draft)
        logger.info("User %s created issue %s", user_id, issue.id)
        return await self._to_view(issue)

    async def update_issue(
        self,
        issue_id: str,
        patch: IssueUpdate | Mapping[str, Any],
        acting_user: User,
    ) -> IssueView:
        issue_id = ensure_object_id(issue_id)
        existing = await self._require_issue(issue_id)
        self._policy.ensure_can_mutate(acting_user, existing, "update")
        update = validate_model(IssueUpdate, patch)
        issue = await self._issues.update(issue_id, update)
        logger.info(
            "User %s updated issue %s (%s)",
            acting_user.id,
            issue_id,
            ", ".join(sorted(update.changes())) or "no changes",
        )
        return await self._to_view(issue)

    async def delete_issue(self, issue_id: str, acting_user: User) -> str:
        """Delete an issue and its comments. Returns a confirmation message."""
        issue_id = ensure_object_id(issue_id)
        existing = await self._require_issue(issue_id)
        self._policy.ensure_can_mutate(acting_user, existing, "delete")
        if not await self._issues.delete(issue_id):
            raise NotFoundError("Issue not found")
        logger.info("User %s deleted issue %s", acting_user.id, issue_id)
        return "Issue and associated comments deleted successfully"

    # ============================================
    # Comments
    # ============================================

    async def list_comments(self, issue_id: str) -> list[CommentView]:
        issue_id = ensure_object_id(issue_id)
        comments = await self._comments.list_by_issue(issue_id)
        return await self._comment_views(comments)

    async def add_comment(self, issue_id: str, content: Any, user_id: str) -> CommentView:
        issue_id = ensure_object_id(issue_id)
        comment = validate_model(CommentCreate, {"content": content})
        created = await self._comments.create(issue_id, user_id, comment)
        logger.info("User %s commented on issue %s", user_id, issue_id)
        views = await self._comment_views([created])
        return views[0]
