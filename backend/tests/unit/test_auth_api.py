"""
Unit tests for authentication API and token verification.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from issue_tracker.api.auth import (
    LoginRequest,
    RegisterRequest,
    _normalize_email,
    login,
    register,
)
from issue_tracker.core.exceptions import AuthenticationError
from issue_tracker.core.security import create_access_token
from issue_tracker.infrastructure.auth.local_auth import LocalAuthProvider
from issue_tracker.models.enums import UserRole
from issue_tracker.utils.ids import new_object_id


class TestEmailNormalization:
    """Tests for email normalization."""

    def test_normalize_email_lowercase(self):
        """Test normalize email lowercase."""
        assert _normalize_email("Test@Example.COM") == "test@example.com"

    def test_normalize_email_strips_whitespace(self):
        """Test normalize email strips whitespace."""
        assert _normalize_email("  test@example.com  ") == "test@example.com"


class TestRegisterRequest:
    def test_password_minimum_length(self):
        """Test password minimum length."""
        with pytest.raises(ValueError):
            RegisterRequest(name="Ann", email="ann@example.com", password="12345")

    def test_name_required(self):
        """Test name required."""
        with pytest.raises(ValueError):
            RegisterRequest(name="", email="ann@example.com", password="123456")

    def test_email_shape(self):
        """Test email shape."""
        with pytest.raises(ValueError):
            RegisterRequest(name="Ann", email="not-an-email", password="123456")

    def test_strips_email_before_pattern_check(self):
        """Padded email passes the format check and is stored stripped."""
        request = RegisterRequest(name="Ann", email="  ann@example.com ", password="123456")
        assert request.email == "ann@example.com"


class TestRegisterAndLogin:
    @pytest.mark.asyncio
    async def test_register_creates_user_and_token(self, settings, user_repo):
        """Test register creates user and token."""
        response = await register(
            RegisterRequest(name=" Ann ", email=" Ann@Example.com ", password="secret1"),
            settings,
            user_repo,
        )

        assert response.user.email == "ann@example.com"
        assert response.user.name == "Ann"
        assert response.user.role == UserRole.USER
        assert response.token_type == "bearer"
        stored = await user_repo.get_by_email("ann@example.com")
        assert stored.password_hash != "secret1"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, settings, user_repo, alice):
        """Test register duplicate email."""
        with pytest.raises(HTTPException) as exc_info:
            await register(
                RegisterRequest(name="Again", email="ALICE@example.com", password="secret1"),
                settings,
                user_repo,
            )
        assert exc_info.value.status_code == 409

    @pytest.mark.asyncio
    async def test_login_success(self, settings, user_repo, alice):
        """Test login success."""
        response = await login(
            LoginRequest(email="alice@example.com", password="password123"),
            settings,
            user_repo,
        )
        assert response.user.id == alice.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [
        ("alice@example.com", "wrong-password"),
        ("nobody@example.com", "password123"),
    ])
    async def test_login_failures_share_message(self, settings, user_repo, alice, email, password):
        """Test login failures share message."""
        with pytest.raises(HTTPException) as exc_info:
            await login(LoginRequest(email=email, password=password), settings, user_repo)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid credentials"


class TestLocalAuthProvider:
    def test_requires_secret(self, settings, user_repo):
        """Test requires secret."""
        with pytest.raises(ValueError):
            LocalAuthProvider(settings.model_copy(update={"JWT_SECRET": ""}), user_repo)

    @pytest.mark.asyncio
    async def test_verify_token_resolves_user(self, settings, user_repo, admin):
        """Test verify token resolves user."""
        provider = LocalAuthProvider(settings, user_repo)
        user = await provider.verify_token(create_access_token(admin.id, settings))

        assert user.id == admin.id
        assert user.is_admin is True

    @pytest.mark.asyncio
    async def test_garbage_token(self, settings, user_repo):
        """Test garbage token."""
        provider = LocalAuthProvider(settings, user_repo)
        with pytest.raises(AuthenticationError, match="token failed"):
            await provider.verify_token("not.a.jwt")

    @pytest.mark.asyncio
    async def test_unknown_user(self, settings, user_repo):
        """Test unknown user."""
        provider = LocalAuthProvider(settings, user_repo)
        token = create_access_token(new_object_id(), settings)
        with pytest.raises(AuthenticationError, match="user not found"):
            await provider.verify_token(token)

    @pytest.mark.asyncio
    async def test_malformed_subject(self, settings):
        """Test malformed subject."""
        provider = LocalAuthProvider(settings, AsyncMock())
        token = create_access_token("dev_user", settings)
        with pytest.raises(AuthenticationError, match="invalid subject"):
            await provider.verify_token(token)
