"""
Local password authentication provider.
"""

from __future__ import annotations

from jose import JWTError

from issue_tracker.core.config import Settings
from issue_tracker.core.exceptions import AuthenticationError
from issue_tracker.core.security import decode_access_token
from issue_tracker.interfaces.auth_provider import IAuthProvider, User
from issue_tracker.interfaces.user_repository import IUserRepository
from issue_tracker.utils.ids import is_valid_object_id


class LocalAuthProvider(IAuthProvider):
    """Local auth provider with HMAC JWT validation."""

    def __init__(self, settings: Settings, user_repo: IUserRepository):
        if not settings.JWT_SECRET:
            raise ValueError("JWT_SECRET must be set for local auth")
        self._settings = settings
        self._user_repo = user_repo

    async def verify_token(self, token: str) -> User:
        if not token:
            raise AuthenticationError("Not authorized, no token")
        try:
            claims = decode_access_token(token, self._settings)
        except JWTError as exc:
            raise AuthenticationError("Not authorized, token failed") from exc

        subject = claims.get("sub")
        if not is_valid_object_id(subject):
            raise AuthenticationError("Not authorized, invalid subject")
        user = await self._user_repo.get(subject)
        if not user:
            raise AuthenticationError("Not authorized, user not found")
        return User(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
        )
