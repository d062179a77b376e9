"""Postgres user repository."""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.exceptions import ConflictingDataError
from pos.models.user import User as UserModel
from pos.repositories.base import ensure_found, only_changed, storage_errors, to_domain
from pos.schemas.user import User, UserCredentials

UPDATABLE = ("name", "email", "password", "role")


class PostgresUserRepository:
    """User storage backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, email: str, password: str, role: str) -> User:
        user = UserModel(name=name, email=email, password=password, role=role)
        async with storage_errors(self.db):
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        return to_domain(user, User)

    async def get_by_id(self, user_id: int) -> User:
        async with storage_errors(self.db):
            result = await self.db.execute(select(UserModel).where(UserModel.id == user_id))
            user = ensure_found(result.scalar_one_or_none(), "user", user_id)
        return to_domain(user, User)

    async def get_by_email(self, email: str) -> UserCredentials:
        async with storage_errors(self.db):
            result = await self.db.execute(select(UserModel).where(UserModel.email == email))
            user = ensure_found(result.scalar_one_or_none(), "user", email)
        return to_domain(user, UserCredentials)

    async def list(self, skip: int, limit: int) -> list[User]:
        async with storage_errors(self.db):
            result = await self.db.execute(
                select(UserModel).order_by(UserModel.id).offset(skip).limit(limit)
            )
            users = result.scalars().all()
        return [to_domain(u, User) for u in users]

    async def update(self, user_id: int, **fields: Any) -> User:
        async with storage_errors(self.db):
            result = await self.db.execute(select(UserModel).where(UserModel.id == user_id))
            user = ensure_found(result.scalar_one_or_none(), "user", user_id)
            for key, value in only_changed(fields, UPDATABLE).items():
                setattr(user, key, value)
            await self.db.commit()
            await self.db.refresh(user)
        return to_domain(user, User)

    async def delete(self, user_id: int) -> None:
        async with storage_errors(self.db, foreign_key_error=ConflictingDataError):
            await self.db.execute(delete(UserModel).where(UserModel.id == user_id))
            await self.db.commit()
