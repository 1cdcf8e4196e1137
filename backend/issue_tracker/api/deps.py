"""
Dependency injection for API endpoints.

Repositories, the issue service and the auth provider are built per request
from the ``Settings`` and ``Database`` objects that the application factory
stores on ``app.state``; nothing here reads module-level globals.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from issue_tracker.core.config import Settings
from issue_tracker.core.exceptions import AuthenticationError
from issue_tracker.core.logger import setup_logger
from issue_tracker.infrastructure.auth.local_auth import LocalAuthProvider
from issue_tracker.infrastructure.local.comment_repository import SqliteCommentRepository
from issue_tracker.infrastructure.local.database import Database
from issue_tracker.infrastructure.local.issue_repository import SqliteIssueRepository
from issue_tracker.infrastructure.local.user_repository import SqliteUserRepository
from issue_tracker.interfaces.auth_provider import IAuthProvider, User
from issue_tracker.interfaces.comment_repository import ICommentRepository
from issue_tracker.interfaces.issue_repository import IIssueRepository
from issue_tracker.interfaces.user_repository import IUserRepository
from issue_tracker.services.issue_permissions import get_mutation_policy
from issue_tracker.services.issue_service import IssueService

logger = setup_logger(__name__)


# ===========================================
# Application Context
# ===========================================


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Database context owned by the application."""
    return request.app.state.database


AppSettings = Annotated[Settings, Depends(get_app_settings)]
AppDatabase = Annotated[Database, Depends(get_database)]


# ===========================================
# Repository Dependencies
# ===========================================


def get_user_repository(database: AppDatabase) -> IUserRepository:
    """Get user repository instance."""
    return SqliteUserRepository(database.session_factory)


def get_comment_repository(database: AppDatabase) -> ICommentRepository:
    """Get comment repository instance."""
    return SqliteCommentRepository(database.session_factory)


def get_issue_repository(
    database: AppDatabase,
    comment_repo: ICommentRepository = Depends(get_comment_repository),
) -> IIssueRepository:
    """Get issue repository instance (cascades deletes to comments)."""
    return SqliteIssueRepository(database.session_factory, comment_repo)


UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
CommentRepo = Annotated[ICommentRepository, Depends(get_comment_repository)]
IssueRepo = Annotated[IIssueRepository, Depends(get_issue_repository)]


# ===========================================
# Service Dependencies
# ===========================================


def get_issue_service(
    settings: AppSettings,
    issue_repo: IssueRepo,
    comment_repo: CommentRepo,
    user_repo: UserRepo,
) -> IssueService:
    """Get issue service wired with the configured mutation policy."""
    return IssueService(
        issue_repo=issue_repo,
        comment_repo=comment_repo,
        user_repo=user_repo,
        mutation_policy=get_mutation_policy(settings.ISSUE_MUTATION_POLICY),
    )


def get_auth_provider(settings: AppSettings, user_repo: UserRepo) -> IAuthProvider:
    """Get auth provider instance."""
    return LocalAuthProvider(settings, user_repo)


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """Resolve the acting user from the bearer token, or fail with 401."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        user = await auth_provider.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Rejected token on %s %s: %s", request.method, request.url.path, e.message)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        )
    request.state.user = user
    return user


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

IssueSvc = Annotated[IssueService, Depends(get_issue_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
