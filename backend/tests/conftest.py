"""
Shared fixtures: an in-memory database per test with repositories, users and
the issue service wired on top of it.
"""

import pytest

from issue_tracker.core.config import Settings
from issue_tracker.core.security import hash_password
from issue_tracker.infrastructure.local.comment_repository import SqliteCommentRepository
from issue_tracker.infrastructure.local.database import Database
from issue_tracker.infrastructure.local.issue_repository import SqliteIssueRepository
from issue_tracker.infrastructure.local.user_repository import SqliteUserRepository
from issue_tracker.interfaces.auth_provider import User
from issue_tracker.models.enums import UserRole
from issue_tracker.models.user import UserCreate
from issue_tracker.services.issue_service import IssueService

TEST_PASSWORD = "password123"


@pytest.fixture
def settings():
    return Settings(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        JWT_SECRET="test-secret",
        JWT_ISSUER="issue-tracker-test",
    )


@pytest.fixture
async def database(settings):
    """Create in-memory database with all tables."""
    db = Database.from_settings(settings)
    await db.init()

    yield db

    await db.dispose()


@pytest.fixture
def user_repo(database):
    return SqliteUserRepository(database.session_factory)


@pytest.fixture
def comment_repo(database):
    return SqliteCommentRepository(database.session_factory)


@pytest.fixture
def issue_repo(database, comment_repo):
    return SqliteIssueRepository(database.session_factory, comment_repo)


@pytest.fixture
def issue_service(issue_repo, comment_repo, user_repo):
    return IssueService(issue_repo=issue_repo, comment_repo=comment_repo, user_repo=user_repo)


async def _create_account(user_repo, name: str, email: str, role: UserRole = UserRole.USER):
    return await user_repo.create(
        UserCreate(
            name=name,
            email=email,
            password_hash=hash_password(TEST_PASSWORD, iterations=1_000),
            role=role,
        )
    )


@pytest.fixture
async def alice(user_repo):
    return await _create_account(user_repo, "Alice", "alice@example.com")


@pytest.fixture
async def bob(user_repo):
    return await _create_account(user_repo, "Bob", "bob@example.com")


@pytest.fixture
async def admin(user_repo):
    return await _create_account(user_repo, "Admin", "admin@example.com", UserRole.ADMIN)


@pytest.fixture
def as_user():
    """Acting user for an account, as the auth provider would resolve it."""

    def _as_user(account) -> User:
        return User(id=account.id, email=account.email, name=account.name, role=account.role)

    return _as_user
