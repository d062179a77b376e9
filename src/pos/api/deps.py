"""API dependencies for authentication, database and service wiring."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from pydantic import BaseModel, ValidationError
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from pos.core.database import get_db
from pos.core.exceptions import (
    EmptyAuthorizationHeaderError,
    ForbiddenError,
    InvalidAuthorizationHeaderError,
    InvalidAuthorizationTypeError,
    InvalidTokenError,
)
from pos.core.redis import get_redis
from pos.core.security import decode_access_token
from pos.repositories import (
    PostgresCategoryRepository,
    PostgresOrderRepository,
    PostgresPaymentRepository,
    PostgresProductRepository,
    PostgresUserRepository,
)
from pos.schemas.user import UserRole
from pos.services.auth_service import AuthService
from pos.services.cache_service import CacheService
from pos.services.category_service import CategoryService
from pos.services.order_service import OrderService
from pos.services.payment_service import PaymentService
from pos.services.product_service import ProductService
from pos.services.user_service import UserService


class BearerAuth(HTTPBearer):
    """``Authorization: Bearer <token>`` scheme with POS error messages.

    Declared as the ``BearerAuth`` security scheme in the OpenAPI document.
    """

    async def __call__(self, request: Request) -> HTTPAuthorizationCredentials:
        """Extract the bearer credentials from the request.

        Raises:
            EmptyAuthorizationHeaderError: Header missing or blank
            InvalidAuthorizationHeaderError: Header is not ``<type> <token>``
            InvalidAuthorizationTypeError: Type is not Bearer
        """
        authorization = request.headers.get("Authorization")
        if not authorization or not authorization.strip():
            raise EmptyAuthorizationHeaderError()

        scheme, token = get_authorization_scheme_param(authorization.strip())
        token = token.strip()
        if not token or len(token.split()) != 1:
            raise InvalidAuthorizationHeaderError()

        if scheme.lower() != "bearer":
            raise InvalidAuthorizationTypeError()

        return HTTPAuthorizationCredentials(scheme=scheme, credentials=token)


bearer_scheme = BearerAuth(bearerFormat="JWT", scheme_name="BearerAuth")


class TokenUser(BaseModel):
    """Identity carried by a verified access token."""

    id: int
    role: UserRole


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> TokenUser:
    """Resolve the caller from a verified access token.

    The token is self-contained, so no lookup is made.

    Raises:
        InvalidTokenError: Signature, format or claims are invalid
        ExpiredTokenError: Token lifetime is over
    """
    payload = decode_access_token(credentials.credentials)
    try:
        return TokenUser(id=payload.get("sub"), role=payload.get("role"))
    except ValidationError:
        raise InvalidTokenError()


async def get_current_admin_user(
    current_user: Annotated[TokenUser, Depends(get_current_user)],
) -> TokenUser:
    """Get current user and verify they are an admin.

    Raises:
        ForbiddenError: Caller is not an admin
    """
    if current_user.role != "admin":
        raise ForbiddenError()
    return current_user


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
AdminUser = Annotated[TokenUser, Depends(get_current_admin_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_cache_service(
    redis: Annotated[Redis, Depends(get_redis)],
) -> CacheService:
    """Get CacheService on the shared Redis connection pool."""
    return CacheService(redis)


CacheServiceDep = Annotated[CacheService, Depends(get_cache_service)]


async def get_user_service(db: DbSession, cache: CacheServiceDep) -> UserService:
    return UserService(PostgresUserRepository(db), cache)


async def get_auth_service(db: DbSession) -> AuthService:
    return AuthService(PostgresUserRepository(db))


async def get_payment_service(db: DbSession, cache: CacheServiceDep) -> PaymentService:
    return PaymentService(PostgresPaymentRepository(db), cache)


async def get_category_service(db: DbSession, cache: CacheServiceDep) -> CategoryService:
    return CategoryService(PostgresCategoryRepository(db), cache)


async def get_product_service(db: DbSession, cache: CacheServiceDep) -> ProductService:
    return ProductService(
        PostgresProductRepository(db), PostgresCategoryRepository(db), cache
    )


async def get_order_service(db: DbSession, cache: CacheServiceDep) -> OrderService:
    """Get OrderService with every repository bound to the request session."""
    return OrderService(
        order_repo=PostgresOrderRepository(db),
        product_repo=PostgresProductRepository(db),
        category_repo=PostgresCategoryRepository(db),
        user_repo=PostgresUserRepository(db),
        payment_repo=PostgresPaymentRepository(db),
        cache=cache,
    )


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
