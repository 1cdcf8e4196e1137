"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from issue_tracker.core.exceptions import DuplicateError
from issue_tracker.infrastructure.local.database import UserORM
from issue_tracker.interfaces.user_repository import IUserRepository
from issue_tracker.models.enums import UserRole
from issue_tracker.models.user import UserAccount, UserCreate
from issue_tracker.utils.ids import new_object_id


class SqliteUserRepository(IUserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, session_factory):
        self._session_factory = session_factory

    def _orm_to_model(self, orm: UserORM) -> UserAccount:
        return UserAccount(
            id=orm.id,
            name=orm.name,
            email=orm.email,
            password_hash=orm.password_hash,
            role=UserRole(orm.role),
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def get(self, user_id: str) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).where(UserORM.id == user_id))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).where(UserORM.email == email))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, UserAccount]:
        ids = {user_id for user_id in user_ids if user_id}
        if not ids:
            return {}
        async with self._session_factory() as session:
            result = await session.execute(select(UserORM).where(UserORM.id.in_(ids)))
            return {orm.id: self._orm_to_model(orm) for orm in result.scalars().all()}

    async def create(self, data: UserCreate) -> UserAccount:
        async with self._session_factory() as session:
            orm = UserORM(
                id=new_object_id(),
                name=data.name,
                email=data.email,
                password_hash=data.password_hash,
                role=data.role.value,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateError(f"Email {data.email} is already registered") from exc
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete_all(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(delete(UserORM))
            await session.commit()
            return result.rowcount or 0
