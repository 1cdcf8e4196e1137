"""
Local authentication endpoints (register/login).
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from issue_tracker.api.deps import AppSettings, CurrentUser, UserRepo
from issue_tracker.core.exceptions import DuplicateError
from issue_tracker.core.logger import setup_logger
from issue_tracker.core.security import create_access_token, hash_password, verify_password
from issue_tracker.models.user import PublicUser, UserCreate

logger = setup_logger(__name__)

router = APIRouter()


class RegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    user: PublicUser


class CurrentUserResponse(BaseModel):
    success: bool = True
    data: PublicUser


def _normalize_email(value: str) -> str:
    return value.strip().lower()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    settings: AppSettings,
    user_repo: UserRepo,
) -> AuthResponse:
    name = data.name.strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name is required",
        )
    email = _normalize_email(data.email)

    existing = await user_repo.get_by_email(email)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists",
        )

    try:
        user = await user_repo.create(
            UserCreate(
                name=name,
                email=email,
                password_hash=hash_password(data.password),
            )
        )
    except DuplicateError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists",
        )
    logger.info("Registered user %s", user.id)
    return AuthResponse(
        access_token=create_access_token(user.id, settings),
        user=user.to_public(),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    data: LoginRequest,
    settings: AppSettings,
    user_repo: UserRepo,
) -> AuthResponse:
    user = await user_repo.get_by_email(_normalize_email(data.email))
    if not user or not verify_password(data.password, user.password_hash):
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    return AuthResponse(
        access_token=create_access_token(user.id, settings),
        user=user.to_public(),
    )


@router.get("/me", response_model=CurrentUserResponse)
async def me(user: CurrentUser) -> CurrentUserResponse:
    return CurrentUserResponse(
        data=PublicUser(id=user.id, name=user.name or "", email=user.email or "", role=user.role)
    )
