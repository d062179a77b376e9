"""User registration, login and management endpoints."""

from fastapi import APIRouter, Query

from pos.api.deps import AdminUser, AuthServiceDep, CurrentUser, UserServiceDep
from pos.schemas.common import Meta, Response
from pos.schemas.user import (
    TokenResponse,
    UserListResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    UserUpdate,
)

router = APIRouter()


@router.post("", response_model=Response[UserResponse])
async def register(user_data: UserRegister, service: UserServiceDep):
    """Register a new cashier account.

    Args:
        user_data: Registration data (name, email, password)
        service: User service

    Returns:
        Created user
    """
    user = await service.register(user_data)
    return Response(data=UserResponse.from_domain(user))


@router.post("/login", response_model=Response[TokenResponse])
async def login(credentials: UserLogin, service: AuthServiceDep):
    """Login and get an access token.

    Args:
        credentials: Login credentials (email, password)
        service: Auth service

    Returns:
        Signed bearer token
    """
    token = await service.login(credentials.email, credentials.password)
    return Response(data=TokenResponse(token=token))


@router.get("", response_model=Response[UserListResponse])
async def list_users(
    service: UserServiceDep,
    current_user: CurrentUser,
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
):
    users = await service.list_users(skip=skip, limit=limit)
    return Response(
        data=UserListResponse(
            meta=Meta(total=len(users), limit=limit, skip=skip),
            users=[UserResponse.from_domain(u) for u in users],
        )
    )


@router.get("/{user_id}", response_model=Response[UserResponse])
async def get_user(user_id: int, service: UserServiceDep, current_user: CurrentUser):
    user = await service.get_user(user_id)
    return Response(data=UserResponse.from_domain(user))


@router.put("/{user_id}", response_model=Response[UserResponse])
async def update_user(
    user_id: int,
    user_data: UserUpdate,
    service: UserServiceDep,
    admin: AdminUser,
):
    """Update a user's profile, role or password (admin only)."""
    user = await service.update_user(user_id, user_data)
    return Response(data=UserResponse.from_domain(user))


@router.delete("/{user_id}", response_model=Response)
async def delete_user(user_id: int, service: UserServiceDep, admin: AdminUser):
    """Delete a user (admin only). Fails while orders still reference them."""
    await service.delete_user(user_id)
    return Response(message="User deleted")
