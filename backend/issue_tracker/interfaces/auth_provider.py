"""
Authentication provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from issue_tracker.models.enums import UserRole


class User(BaseModel):
    """Acting user resolved from an identity token."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class IAuthProvider(ABC):
    """Abstract interface for identity token verification."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """
        Resolve the acting user from a token.

        Raises:
            AuthenticationError: If the token is missing, malformed, expired,
                or names an unknown user
        """
        pass
