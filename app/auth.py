"""Authentication helpers: password hashing, API tokens and the caller dependency."""

import logging
import secrets
from abc import ABC, abstractmethod
from functools import lru_cache

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from . import crud
from .core import get_settings
from .database import get_db
from .errors import Unauthenticated
from .models import User

logger = logging.getLogger(__name__)

# The header carries the raw token, no "Bearer " prefix is stripped.
token_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="API token issued by registration or login.",
)


class PasswordHasher(ABC):
    """One-way salted password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return the hash to store for ``password``."""

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """Check ``password`` against a stored hash."""


class TokenGenerator(ABC):
    """Source of unguessable opaque API tokens."""

    @abstractmethod
    def generate(self) -> str:
        """Return a new token."""


class PasslibPasswordHasher(PasswordHasher):
    """Password hasher backed by a passlib ``CryptContext``."""

    def __init__(self, schemes: list[str]):
        self.context = CryptContext(schemes=schemes, deprecated="auto")

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        return self.context.verify(password, hashed)


class HexTokenGenerator(TokenGenerator):
    """Token generator returning ``nbytes`` random bytes as hex."""

    def __init__(self, nbytes: int = 32):
        self.nbytes = nbytes

    def generate(self) -> str:
        return secrets.token_hex(self.nbytes)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    """Dependency returning the configured password hasher."""
    return PasslibPasswordHasher(get_settings().PASSWORD_SCHEMES)


@lru_cache()
def get_token_generator() -> TokenGenerator:
    """Dependency returning the configured token generator."""
    return HexTokenGenerator(get_settings().TOKEN_BYTES)


def get_current_user(
    token: str | None = Security(token_header), db: Session = Depends(get_db)
) -> User:
    """
    Dependency that resolves the caller from the ``Authorization`` header.

    The header value must equal a stored token exactly.

    Args:
        token (str | None): Raw ``Authorization`` header value.
        db (Session): Database session.

    Raises:
        Unauthenticated: If the header is missing or matches no user.

    Returns:
        User: Authenticated user.
    """
    if not token:
        raise Unauthenticated()
    user = crud.get_user_by_token(db, token)
    if user is None:
        logger.debug("Rejected unknown API token")
        raise Unauthenticated()
    return user
