"""Authentication service issuing access tokens."""

import logging

import jwt

from pos.core.exceptions import (
    DataNotFoundError,
    InvalidCredentialsError,
    TokenCreationError,
)
from pos.core.security import create_access_token, verify_password
from pos.repositories.base import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for an access token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        try:
            user = await self.repo.get_by_email(email)
        except DataNotFoundError:
            raise InvalidCredentialsError()

        if not verify_password(password, user.password):
            raise InvalidCredentialsError()

        try:
            return create_access_token({"sub": str(user.id), "role": user.role})
        except jwt.PyJWTError as e:
            logger.error(f"Failed to sign token for user {user.id}: {e}")
            raise TokenCreationError()
