"""
Issue repository interface.

Defines the contract for issue persistence. Issues are readable by every
authenticated user; identifiers are format-checked by callers before they
reach an implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from issue_tracker.models.enums import IssuePriority, IssueStatus
from issue_tracker.models.issue import Issue, IssueCreate, IssueUpdate


class IIssueRepository(ABC):
    """Abstract interface for issue persistence."""

    @abstractmethod
    async def create(self, author_id: str, issue: IssueCreate) -> Issue:
        """
        Create a new issue.

        Args:
            author_id: Creating user's ID (always overrides any caller value)
            issue: Validated issue creation data

        Returns:
            Created issue
        """
        pass

    @abstractmethod
    async def get(self, issue_id: str) -> Optional[Issue]:
        """
        Get an issue by ID.

        Returns:
            Issue if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(
        self,
        author_id: Optional[str] = None,
        status: Optional[IssueStatus] = None,
        priority: Optional[IssuePriority] = None,
    ) -> list[Issue]:
        """
        List issues, newest first.

        Args:
            author_id: Only issues created by this user
            status: Filter by status
            priority: Filter by priority

        Returns:
            Issues ordered by created_at descending
        """
        pass

    @abstractmethod
    async def update(self, issue_id: str, update: IssueUpdate) -> Issue:
        """
        Apply the fields present in ``update``. The author is never changed.

        Raises:
            NotFoundError: If the issue does not exist
        """
        pass

    @abstractmethod
    async def delete(self, issue_id: str) -> bool:
        """
        Delete an issue and cascade to its comments.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def count_by_status(self, author_id: Optional[str] = None) -> dict[IssueStatus, int]:
        """Count issues per status, optionally scoped to one author."""
        pass

    @abstractmethod
    async def count_by_priority(self) -> dict[IssuePriority, int]:
        """Count all issues per priority."""
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every issue and comment. Returns count of issues deleted."""
        pass
