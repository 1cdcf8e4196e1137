"""Pydantic models (schemas) for the application."""

from issue_tracker.models.comment import (
    Comment,
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    CommentView,
)
from issue_tracker.models.enums import IssuePriority, IssueStatus, UserRole
from issue_tracker.models.issue import (
    Issue,
    IssueCreate,
    IssueListResponse,
    IssueOverview,
    IssueResponse,
    IssueStats,
    IssueUpdate,
    IssueView,
    MessageResponse,
)
from issue_tracker.models.user import AuthorSummary, PublicUser, UserAccount, UserCreate

__all__ = [
    # Enums
    "IssueStatus",
    "IssuePriority",
    "UserRole",
    # User
    "UserCreate",
    "UserAccount",
    "PublicUser",
    "AuthorSummary",
    # Issue
    "Issue",
    "IssueCreate",
    "IssueUpdate",
    "IssueView",
    "IssueStats",
    "IssueOverview",
    "IssueListResponse",
    "IssueResponse",
    "MessageResponse",
    # Comment
    "Comment",
    "CommentCreate",
    "CommentView",
    "CommentListResponse",
    "CommentResponse",
]
