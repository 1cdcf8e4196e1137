"""
Enum definitions for the issue tracker.
"""

from enum import Enum


class IssueStatus(str, Enum):
    """Issue workflow status."""

    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class IssuePriority(str, Enum):
    """Issue priority level."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class UserRole(str, Enum):
    """Account role."""

    ADMIN = "admin"
    USER = "user"


# Days an issue may stay open before it counts as overdue
OVERDUE_THRESHOLD_DAYS: dict[IssuePriority, int] = {
    IssuePriority.URGENT: 1,
    IssuePriority.HIGH: 3,
    IssuePriority.MEDIUM: 7,
    IssuePriority.LOW: 14,
}

DEFAULT_OVERDUE_THRESHOLD_DAYS = 14
