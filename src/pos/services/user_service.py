"""User service for registration and account management."""

from pos.core.exceptions import NoUpdatedDataError
from pos.core.security import get_password_hash
from pos.repositories.base import UserRepository
from pos.schemas.user import User, UserRegister, UserUpdate
from pos.services.cache_keys import (
    USER,
    collection_pattern,
    generate_cache_key,
    generate_cache_key_params,
)
from pos.services.cache_service import CacheService, ReadThroughCache


class UserService:
    """Service class for user operations."""

    def __init__(self, repo: UserRepository, cache: CacheService):
        self.repo = repo
        self.cached = ReadThroughCache(cache)

    async def register(self, user_data: UserRegister) -> User:
        """Create a new cashier account.

        Args:
            user_data: Registration data

        Returns:
            Created user

        Raises:
            ConflictingDataError: Email already registered
        """
        user = await self.repo.create(
            name=user_data.name,
            email=user_data.email,
            password=get_password_hash(user_data.password),
            role="cashier",
        )

        await self.cached.store(generate_cache_key(USER[0], user.id), user)
        await self.cached.invalidate(patterns=(collection_pattern(USER[1]),))

        return user

    async def get_user(self, user_id: int) -> User:
        return await self.cached.fetch(
            generate_cache_key(USER[0], user_id),
            User,
            lambda: self.repo.get_by_id(user_id),
        )

    async def list_users(self, skip: int = 0, limit: int = 10) -> list[User]:
        params = generate_cache_key_params(skip=skip, limit=limit)
        return await self.cached.fetch(
            generate_cache_key(USER[1], params),
            list[User],
            lambda: self.repo.list(skip, limit),
        )

    async def update_user(self, user_id: int, user_data: UserUpdate) -> User:
        """Update name, email, role or password.

        A supplied password always counts as a change and is re-hashed.

        Raises:
            DataNotFoundError: User does not exist
            NoUpdatedDataError: Nothing supplied or nothing differs
            ConflictingDataError: Email already registered
        """
        existing = await self.repo.get_by_id(user_id)
        changes = {
            field: value
            for field, value in user_data.model_dump(
                exclude_none=True, exclude={"password"}
            ).items()
            if getattr(existing, field) != value
        }
        if user_data.password:
            changes["password"] = get_password_hash(user_data.password)
        if not changes:
            raise NoUpdatedDataError()

        user = await self.repo.update(user_id, **changes)

        key = generate_cache_key(USER[0], user_id)
        await self.cached.invalidate(key)
        await self.cached.store(key, user)
        await self.cached.invalidate(patterns=(collection_pattern(USER[1]),))

        return user

    async def delete_user(self, user_id: int) -> None:
        await self.repo.get_by_id(user_id)
        await self.repo.delete(user_id)

        await self.cached.invalidate(
            generate_cache_key(USER[0], user_id),
            patterns=(collection_pattern(USER[1]),),
        )
