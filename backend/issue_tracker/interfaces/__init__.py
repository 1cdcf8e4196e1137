"""Abstract interfaces for infrastructure abstraction."""

from issue_tracker.interfaces.auth_provider import IAuthProvider, User
from issue_tracker.interfaces.comment_repository import ICommentRepository
from issue_tracker.interfaces.issue_repository import IIssueRepository
from issue_tracker.interfaces.user_repository import IUserRepository

__all__ = [
    "IAuthProvider",
    "User",
    "IUserRepository",
    "IIssueRepository",
    "ICommentRepository",
]
