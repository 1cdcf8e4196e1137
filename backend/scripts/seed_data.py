"""
Seed sample users and issues.

Usage:
    cd backend
    python -m scripts.seed_data --import    # Replace all data with the sample set
    python -m scripts.seed_data --destroy   # Delete all users, issues and comments
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Suppress noisy SQLAlchemy logs during seed
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# Ensure backend root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from issue_tracker.core.config import get_settings
from issue_tracker.core.security import hash_password
from issue_tracker.infrastructure.local.comment_repository import SqliteCommentRepository
from issue_tracker.infrastructure.local.database import Database
from issue_tracker.infrastructure.local.issue_repository import SqliteIssueRepository
from issue_tracker.infrastructure.local.user_repository import SqliteUserRepository
from issue_tracker.models.enums import IssuePriority, IssueStatus, UserRole
from issue_tracker.models.issue import IssueCreate
from issue_tracker.models.user import UserCreate

SAMPLE_USERS = [
    {"name": "Admin User", "email": "admin@issuetracker.com", "password": "admin123", "role": UserRole.ADMIN},
    {"name": "John Doe", "email": "john@example.com", "password": "password123", "role": UserRole.USER},
    {"name": "Jane Smith", "email": "jane@example.com", "password": "password123", "role": UserRole.USER},
]

SAMPLE_ISSUES = [
    IssueCreate(
        title="Login form validation not working",
        description="Users can submit empty login forms without proper validation",
        priority=IssuePriority.HIGH,
        status=IssueStatus.OPEN,
        assignee="John Doe",
    ),
    IssueCreate(
        title="Add dark mode theme",
        description="Implement a dark mode toggle for better user experience",
        priority=IssuePriority.MEDIUM,
        status=IssueStatus.IN_PROGRESS,
        assignee="Alice Johnson",
    ),
    IssueCreate(
        title="Database connection timeout",
        description="Random database connection timeouts causing application crashes",
        priority=IssuePriority.URGENT,
        status=IssueStatus.OPEN,
        assignee="Mike Davis",
    ),
    IssueCreate(
        title="API documentation update",
        description="Update API documentation to reflect recent changes",
        priority=IssuePriority.LOW,
        status=IssueStatus.OPEN,
        assignee="Tom Brown",
    ),
    IssueCreate(
        title="Performance optimization",
        description="Optimize application performance for better user experience",
        priority=IssuePriority.MEDIUM,
        status=IssueStatus.RESOLVED,
        assignee="David Lee",
    ),
    IssueCreate(
        title="Email notification system",
        description="Implement email notifications for issue updates",
        priority=IssuePriority.HIGH,
        status=IssueStatus.OPEN,
        assignee="Chris Taylor",
    ),
    IssueCreate(
        title="Mobile responsive design",
        description="Make the application mobile-friendly and responsive",
        priority=IssuePriority.MEDIUM,
        status=IssueStatus.IN_PROGRESS,
        assignee="Jennifer Garcia",
    ),
    IssueCreate(
        title="Security vulnerability in user authentication",
        description="Potential security issue found in user authentication process",
        priority=IssuePriority.URGENT,
        status=IssueStatus.CLOSED,
        assignee="Security Team",
    ),
]


def _repositories(database: Database):
    comment_repo = SqliteCommentRepository(database.session_factory)
    issue_repo = SqliteIssueRepository(database.session_factory, comment_repo)
    user_repo = SqliteUserRepository(database.session_factory)
    return user_repo, issue_repo


async def destroy_data(database: Database) -> None:
    user_repo, issue_repo = _repositories(database)
    await issue_repo.delete_all()
    await user_repo.delete_all()


async def import_data(database: Database) -> tuple[int, int]:
    """Replace all data with the sample set. Returns (users, issues) inserted."""
    await destroy_data(database)
    print("Existing data cleared")

    user_repo, issue_repo = _repositories(database)
    users = []
    for entry in SAMPLE_USERS:
        users.append(
            await user_repo.create(
                UserCreate(
                    name=entry["name"],
                    email=entry["email"],
                    password_hash=hash_password(entry["password"]),
                    role=entry["role"],
                )
            )
        )
    print(f"Users imported: {len(users)}")

    admin = users[0]
    for issue in SAMPLE_ISSUES:
        await issue_repo.create(admin.id, issue)
    print(f"Issues imported: {len(SAMPLE_ISSUES)}")
    return len(users), len(SAMPLE_ISSUES)


async def run(action: str) -> None:
    database = Database.from_settings(get_settings())
    try:
        await database.init()
        if action == "import":
            await import_data(database)
            print("Data import completed successfully")
        else:
            await destroy_data(database)
            print("Data deleted successfully")
    finally:
        await database.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed or clear issue tracker data.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-i", "--import", dest="action", action="store_const", const="import",
                       help="Replace all data with sample users and issues.")
    group.add_argument("-d", "--destroy", dest="action", action="store_const", const="destroy",
                       help="Delete all users, issues and comments.")
    args = parser.parse_args()
    asyncio.run(run(args.action))


if __name__ == "__main__":
    main()
