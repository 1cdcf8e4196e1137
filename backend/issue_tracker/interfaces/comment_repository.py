"""
Comment repository interface.

Defines the contract for comment persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from issue_tracker.models.comment import Comment, CommentCreate


class ICommentRepository(ABC):
    """Abstract interface for comment persistence."""

    @abstractmethod
    async def create(self, issue_id: str, author_id: str, comment: CommentCreate) -> Comment:
        """Create a comment. Raises NotFoundError if the issue does not exist."""
        pass

    @abstractmethod
    async def list_by_issue(self, issue_id: str) -> list[Comment]:
        """
        List comments for an issue, newest first.

        Raises NotFoundError if the issue does not exist, so an empty list
        always means "no comments yet".
        """
        pass

    @abstractmethod
    async def count_by_issues(self, issue_ids: Iterable[str]) -> dict[str, int]:
        """Count comments for several issues in one query. Issues without comments are absent."""
        pass

    @abstractmethod
    async def delete_by_issue(self, issue_id: str) -> int:
        """Delete all comments for an issue. Returns count deleted (0 if none)."""
        pass
