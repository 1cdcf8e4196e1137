"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and the ``Database`` context that
owns the engine and session factory. One ``Database`` is built at process
start, handed to every repository, and disposed on shutdown.
"""

from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, String, Text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from issue_tracker.core.config import Settings
from issue_tracker.core.logger import setup_logger
from issue_tracker.utils.datetime_utils import now_utc
from issue_tracker.utils.ids import new_object_id

logger = setup_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class UserORM(Base):
    """User account ORM model."""

    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=new_object_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(10), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class IssueORM(Base):
    """Issue ORM model."""

    __tablename__ = "issues"
    __table_args__ = (
        Index("ix_issues_status_priority", "status", "priority"),
        Index("ix_issues_author_status", "author_id", "status"),
    )

    id = Column(String(24), primary_key=True, default=new_object_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="Open")
    priority = Column(String(10), nullable=False, default="Low")
    assignee = Column(String(100), nullable=False, default="")
    # Lookup key only: deleting a user leaves their issues in place
    author_id = Column(String(24), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, index=True)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class CommentORM(Base):
    """Comment ORM model."""

    __tablename__ = "comments"

    id = Column(String(24), primary_key=True, default=new_object_id)
    # Lookup key: the issue row is deleted before its comments
    issue_id = Column(String(24), nullable=False, index=True)
    author_id = Column(String(24), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, index=True)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


# ===========================================
# Database Session Management
# ===========================================


def _is_memory_url(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


class Database:
    """Engine and session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs: dict[str, object] = {"echo": echo}
        if _is_memory_url(url):
            # Every session must see the same in-memory database
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    async def init(self) -> None:
        """Create tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database ready at %s", self.engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("Database connections closed")
