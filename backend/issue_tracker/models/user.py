"""
User account models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from issue_tracker.models.enums import UserRole


class UserCreate(BaseModel):
    """Create a user account."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password_hash: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.USER


class UserAccount(BaseModel):
    """User account stored in the database. Never serialized outward."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    created_at: datetime
    updated_at: datetime

    def to_public(self) -> "PublicUser":
        return PublicUser(id=self.id, name=self.name, email=self.email, role=self.role)

    def to_author(self) -> "AuthorSummary":
        return AuthorSummary(id=self.id, name=self.name, email=self.email)


class PublicUser(BaseModel):
    """User fields safe to return to clients."""

    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER


class AuthorSummary(BaseModel):
    """Author display fields joined onto issues and comments."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None
