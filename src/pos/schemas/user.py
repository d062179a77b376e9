"""User schemas for request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from pos.schemas.common import Meta

UserRole = Literal["admin", "cashier"]


class UserRegister(BaseModel):
    """Schema for user registration request."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)


class UserLogin(BaseModel):
    """Schema for user login request."""

    email: EmailStr
    password: str = Field(..., min_length=8)


class UserUpdate(BaseModel):
    """Schema for user update request. Omitted fields keep their value."""

    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8)
    role: UserRole | None = None


class User(BaseModel):
    """User as returned by repositories and stored in the cache.

    The password hash is deliberately absent.
    """

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserCredentials(User):
    """User plus stored password hash, only used for login."""

    password: str


class UserResponse(BaseModel):
    """Schema for user response."""

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserListResponse(BaseModel):
    meta: Meta
    users: list[UserResponse]


class TokenResponse(BaseModel):
    """Schema for login token response."""

    token: str
