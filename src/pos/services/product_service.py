"""Product service for CRUD operations."""

from pos.core.exceptions import NoUpdatedDataError
from pos.repositories.base import CategoryRepository, ProductRepository
from pos.schemas.product import Product, ProductCreate, ProductUpdate
from pos.services.cache_keys import (
    PRODUCT,
    collection_pattern,
    generate_cache_key,
    generate_cache_key_params,
)
from pos.services.cache_service import CacheService, ReadThroughCache


class ProductService:
    """Service class for product operations.

    Products are always returned with their category attached.
    """

    def __init__(
        self,
        repo: ProductRepository,
        category_repo: CategoryRepository,
        cache: CacheService,
    ):
        self.repo = repo
        self.category_repo = category_repo
        self.cached = ReadThroughCache(cache)

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a new product.

        Args:
            data: Product creation data

        Returns:
            Created product with category

        Raises:
            DataNotFoundError: Category does not exist
            ConflictingDataError: Name already taken
        """
        category = await self.category_repo.get_by_id(data.category_id)

        product = await self.repo.create(
            category_id=data.category_id,
            name=data.name,
            image=data.image,
            price=data.price,
            stock=data.stock,
        )
        product = product.model_copy(update={"category": category})

        await self.cached.store(generate_cache_key(PRODUCT[0], product.id), product)
        await self.cached.invalidate(patterns=(collection_pattern(PRODUCT[1]),))

        return product

    async def get_product(self, product_id: int) -> Product:
        async def load() -> Product:
            product = await self.repo.get_by_id(product_id)
            return await self._with_category(product)

        return await self.cached.fetch(generate_cache_key(PRODUCT[0], product_id), Product, load)

    async def list_products(
        self,
        search: str | None = None,
        category_id: int | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Product]:
        """List products, cached per query shape.

        Args:
            search: Case-insensitive name substring
            category_id: Restrict to one category
            skip: Number of records to skip
            limit: Maximum number of records to return
        """
        params = generate_cache_key_params(
            skip=skip, limit=limit, category_id=category_id, search=search
        )

        async def load() -> list[Product]:
            products = await self.repo.list(search, category_id, skip, limit)
            return [await self._with_category(p) for p in products]

        return await self.cached.fetch(
            generate_cache_key(PRODUCT[1], params), list[Product], load
        )

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """Update a product. Omitted fields keep their stored value.

        Raises:
            DataNotFoundError: Product or new category does not exist
            NoUpdatedDataError: Nothing supplied or nothing differs
            ConflictingDataError: Name already taken
        """
        existing = await self.repo.get_by_id(product_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_none=True).items()
            if getattr(existing, field) != value
        }
        if not changes:
            raise NoUpdatedDataError()

        category = await self.category_repo.get_by_id(
            changes.get("category_id", existing.category_id)
        )

        product = await self.repo.update(product_id, **changes)
        product = product.model_copy(update={"category": category})

        key = generate_cache_key(PRODUCT[0], product_id)
        await self.cached.invalidate(key)
        await self.cached.store(key, product)
        await self.cached.invalidate(patterns=(collection_pattern(PRODUCT[1]),))

        return product

    async def delete_product(self, product_id: int) -> None:
        await self.repo.get_by_id(product_id)
        await self.repo.delete(product_id)

        await self.cached.invalidate(
            generate_cache_key(PRODUCT[0], product_id),
            patterns=(collection_pattern(PRODUCT[1]),),
        )

    async def _with_category(self, product: Product) -> Product:
        category = await self.category_repo.get_by_id(product.category_id)
        return product.model_copy(update={"category": category})
