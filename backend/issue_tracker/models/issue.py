"""
Issue model definitions.

Issues are readable by every authenticated user. Age and overdue flags are
derived from the stored creation timestamp at read time and never persisted.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from issue_tracker.models.enums import (
    DEFAULT_OVERDUE_THRESHOLD_DAYS,
    OVERDUE_THRESHOLD_DAYS,
    IssuePriority,
    IssueStatus,
)
from issue_tracker.models.user import AuthorSummary
from issue_tracker.utils.datetime_utils import ensure_utc, now_utc

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
ASSIGNEE_MAX_LENGTH = 100

_ONE_DAY = timedelta(days=1)


class IssueCreate(BaseModel):
    """Schema for creating a new issue. The author is never taken from here."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(..., min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    status: IssueStatus = IssueStatus.OPEN
    priority: IssuePriority = IssuePriority.LOW
    assignee: str = Field(default="", max_length=ASSIGNEE_MAX_LENGTH)

    @field_validator("description", "assignee", mode="before")
    @classmethod
    def _blank_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class IssueUpdate(BaseModel):
    """
    Schema for a partial issue update.

    Only fields present in the payload are validated and applied; unknown keys
    (including ``author``) are dropped.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: Optional[str] = Field(None, min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: Optional[IssueStatus] = None
    priority: Optional[IssuePriority] = None
    assignee: Optional[str] = Field(None, max_length=ASSIGNEE_MAX_LENGTH)

    @field_validator("description", "assignee", mode="before")
    @classmethod
    def _blank_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @model_validator(mode="after")
    def _required_fields_not_null(self) -> "IssueUpdate":
        for name in ("title", "status", "priority"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied by the caller."""
        return self.model_dump(exclude_unset=True)


class Issue(BaseModel):
    """Stored issue record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str = ""
    status: IssueStatus = IssueStatus.OPEN
    priority: IssuePriority = IssuePriority.LOW
    assignee: str = ""
    author_id: str
    created_at: datetime
    updated_at: datetime

    def age_in_days(self, now: Optional[datetime] = None) -> int:
        return compute_age_in_days(self.created_at, now)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        return compute_is_overdue(self.priority, self.age_in_days(now))


def compute_age_in_days(created_at: datetime, now: Optional[datetime] = None) -> int:
    """Whole days since creation, rounded up."""
    now = ensure_utc(now) if now is not None else now_utc()
    elapsed = abs(now - ensure_utc(created_at))
    return math.ceil(elapsed / _ONE_DAY)


def compute_is_overdue(priority: IssuePriority | str, age_in_days: int) -> bool:
    """An issue is overdue once its age exceeds its priority's threshold."""
    try:
        threshold = OVERDUE_THRESHOLD_DAYS[IssuePriority(priority)]
    except ValueError:
        threshold = DEFAULT_OVERDUE_THRESHOLD_DAYS
    return age_in_days > threshold


class IssueView(BaseModel):
    """Issue as returned to clients: joined author plus derived fields."""

    id: str
    title: str
    description: str
    status: IssueStatus
    priority: IssuePriority
    assignee: str
    author_id: str
    author: Optional[AuthorSummary] = None
    comment_count: int = 0
    age_in_days: int
    is_overdue: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(
        cls,
        issue: Issue,
        author: Optional[AuthorSummary],
        comment_count: int = 0,
        now: Optional[datetime] = None,
    ) -> "IssueView":
        age = issue.age_in_days(now)
        return cls(
            id=issue.id,
            title=issue.title,
            description=issue.description,
            status=issue.status,
            priority=issue.priority,
            assignee=issue.assignee,
            author_id=issue.author_id,
            author=author,
            comment_count=comment_count,
            age_in_days=age,
            is_overdue=compute_is_overdue(issue.priority, age),
            created_at=ensure_utc(issue.created_at),
            updated_at=ensure_utc(issue.updated_at),
        )


class IssueStats(BaseModel):
    """Per-author issue counts."""

    total: int = 0
    open: int = 0
    in_progress: int = 0
    resolved: int = 0
    closed: int = 0
    solved: int = 0
    ongoing: int = 0
    completion_rate: float = 0

    @classmethod
    def from_counts(cls, counts: Mapping[IssueStatus, int]) -> "IssueStats":
        open_ = counts.get(IssueStatus.OPEN, 0)
        in_progress = counts.get(IssueStatus.IN_PROGRESS, 0)
        resolved = counts.get(IssueStatus.RESOLVED, 0)
        closed = counts.get(IssueStatus.CLOSED, 0)
        total = open_ + in_progress + resolved + closed
        solved = resolved + closed
        return cls(
            total=total,
            open=open_,
            in_progress=in_progress,
            resolved=resolved,
            closed=closed,
            solved=solved,
            ongoing=open_ + in_progress,
            completion_rate=round(solved / total * 100, 1) if total > 0 else 0,
        )


class IssueOverview(BaseModel):
    """Tracker-wide counts by status and by priority."""

    total: int = 0
    open: int = 0
    in_progress: int = 0
    resolved: int = 0
    closed: int = 0
    urgent: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    @classmethod
    def from_counts(
        cls,
        by_status: Mapping[IssueStatus, int],
        by_priority: Mapping[IssuePriority, int],
    ) -> "IssueOverview":
        return cls(
            total=sum(by_status.values()),
            open=by_status.get(IssueStatus.OPEN, 0),
            in_progress=by_status.get(IssueStatus.IN_PROGRESS, 0),
            resolved=by_status.get(IssueStatus.RESOLVED, 0),
            closed=by_status.get(IssueStatus.CLOSED, 0),
            urgent=by_priority.get(IssuePriority.URGENT, 0),
            high=by_priority.get(IssuePriority.HIGH, 0),
            medium=by_priority.get(IssuePriority.MEDIUM, 0),
            low=by_priority.get(IssuePriority.LOW, 0),
        )


# ============================================
# Response envelopes
# ============================================


class IssueListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[IssueView]


class IssueResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: IssueView


class IssueStatsResponse(BaseModel):
    success: bool = True
    data: IssueStats


class IssueOverviewResponse(BaseModel):
    success: bool = True
    data: IssueOverview


class MessageResponse(BaseModel):
    success: bool = True
    message: str
