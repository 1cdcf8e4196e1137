"""
Application configuration using Pydantic Settings.

Settings are loaded once at process start and passed explicitly into the
application factory, the database context and the auth provider.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./issue_tracker.db"
    DATABASE_ECHO: bool = False

    # ===========================================
    # Auth (password + JWT)
    # ===========================================
    JWT_SECRET: str = ""
    JWT_ISSUER: str = "issue-tracker"
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7

    # ===========================================
    # Issue access
    # ===========================================
    # permissive: any authenticated user may update/delete any issue
    # owner_or_admin: only the author or an admin may update/delete
    ISSUE_MUTATION_POLICY: Literal["permissive", "owner_or_admin"] = "permissive"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    ALLOWED_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:5174",
        ]
    )

    @property
    def is_development(self) -> bool:
        """Check if error details and request logging should be exposed."""
        return self.DEBUG or self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
