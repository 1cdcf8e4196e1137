"""
Comment model definitions.

Each comment belongs to exactly one issue and is removed with it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from issue_tracker.models.user import AuthorSummary
from issue_tracker.utils.datetime_utils import ensure_utc

CONTENT_MAX_LENGTH = 2000


class CommentCreate(BaseModel):
    """Schema for creating a comment."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH)


class Comment(BaseModel):
    """Stored comment record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    issue_id: str
    author_id: str
    content: str
    created_at: datetime
    updated_at: datetime


class CommentView(BaseModel):
    """Comment as returned to clients, with the author joined in."""

    id: str
    issue_id: str
    author_id: str
    author: Optional[AuthorSummary] = None
    content: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, comment: Comment, author: Optional[AuthorSummary]) -> "CommentView":
        return cls(
            id=comment.id,
            issue_id=comment.issue_id,
            author_id=comment.author_id,
            author=author,
            content=comment.content,
            created_at=ensure_utc(comment.created_at),
            updated_at=ensure_utc(comment.updated_at),
        )


class CommentListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[CommentView]


class CommentResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: CommentView
