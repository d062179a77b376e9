"""Category service for CRUD operations."""

from pos.core.exceptions import NoUpdatedDataError
from pos.repositories.base import CategoryRepository
from pos.schemas.category import Category, CategoryCreate, CategoryUpdate
from pos.services.cache_keys import (
    CATEGORY,
    collection_pattern,
    generate_cache_key,
    generate_cache_key_params,
)
from pos.services.cache_service import CacheService, ReadThroughCache


class CategoryService:
    """Service class for category operations."""

    def __init__(self, repo: CategoryRepository, cache: CacheService):
        self.repo = repo
        self.cached = ReadThroughCache(cache)

    async def create_category(self, data: CategoryCreate) -> Category:
        category = await self.repo.create(name=data.name)

        await self.cached.store(generate_cache_key(CATEGORY[0], category.id), category)
        await self.cached.invalidate(patterns=(collection_pattern(CATEGORY[1]),))

        return category

    async def get_category(self, category_id: int) -> Category:
        return await self.cached.fetch(
            generate_cache_key(CATEGORY[0], category_id),
            Category,
            lambda: self.repo.get_by_id(category_id),
        )

    async def list_categories(self, skip: int = 0, limit: int = 10) -> list[Category]:
        params = generate_cache_key_params(skip=skip, limit=limit)
        return await self.cached.fetch(
            generate_cache_key(CATEGORY[1], params),
            list[Category],
            lambda: self.repo.list(skip, limit),
        )

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        """Rename a category.

        Raises:
            DataNotFoundError: Category does not exist
            NoUpdatedDataError: Name missing or unchanged
            ConflictingDataError: Name already taken
        """
        existing = await self.repo.get_by_id(category_id)
        if data.name is None or data.name == existing.name:
            raise NoUpdatedDataError()

        category = await self.repo.update(category_id, name=data.name)

        key = generate_cache_key(CATEGORY[0], category_id)
        await self.cached.invalidate(key)
        await self.cached.store(key, category)
        await self.cached.invalidate(patterns=(collection_pattern(CATEGORY[1]),))

        return category

    async def delete_category(self, category_id: int) -> None:
        await self.repo.get_by_id(category_id)
        await self.repo.delete(category_id)

        await self.cached.invalidate(
            generate_cache_key(CATEGORY[0], category_id),
            patterns=(collection_pattern(CATEGORY[1]),),
        )
