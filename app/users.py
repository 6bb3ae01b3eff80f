"""User registration, login and profile routes for the Contacts API."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from . import schemas, crud
from .auth import (
    PasswordHasher,
    TokenGenerator,
    get_current_user,
    get_password_hasher,
    get_token_generator,
)
from .database import get_db
from .errors import InvalidCredentials
from .models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "", response_model=schemas.UserTokenOut, status_code=status.HTTP_201_CREATED
)
def register(
    user_in: schemas.UserCreate,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenGenerator = Depends(get_token_generator),
):
    """
    Register a new user and issue its first API token.

    Args:
        user_in (UserCreate): Registration data.
        db (Session): Database session.
        hasher (PasswordHasher): Password hashing capability.
        tokens (TokenGenerator): Token source.

    Raises:
        ValidationError: If the username is already registered.

    Returns:
        UserTokenOut: Created user with token.
    """
    user = crud.create_user(
        db, user_in, hasher.hash(user_in.password), tokens.generate()
    )
    logger.info("Registered user %s", user.username)
    return user


@router.post("/login", response_model=schemas.UserTokenOut)
def login(
    credentials: schemas.UserLogin,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenGenerator = Depends(get_token_generator),
):
    """
    Authenticate a user and replace their API token.

    Any previously issued token stops working.

    Raises:
        InvalidCredentials: If the username is unknown or the password
            does not match.
    """
    user = crud.get_user_by_username(db, credentials.username)
    if not user or not hasher.verify(credentials.password, user.password):
        logger.warning("Failed login for %s", credentials.username)
        raise InvalidCredentials()
    user = crud.set_user_token(db, user, tokens.generate())
    logger.info("User %s logged in", user.username)
    return user


@router.get("/current", response_model=schemas.UserOut)
def read_current(current_user: User = Depends(get_current_user)):
    """
    Retrieve details of the currently authenticated user.

    Args:
        current_user (User): Authenticated user.

    Returns:
        UserOut: User profile information.
    """
    return current_user


@router.patch("/current", response_model=schemas.UserOut)
def update_current(
    changes: schemas.UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    Update name and/or password of the authenticated user.

    Fields that are absent, null or empty are left unchanged.

    Args:
        changes (UserUpdate): Fields to update.
        db (Session): Database session.
        current_user (User): Authenticated user.
        hasher (PasswordHasher): Password hashing capability.

    Returns:
        UserOut: Updated user profile.
    """
    data = {key: value for key, value in changes.model_dump().items() if value}
    if "password" in data:
        data["password"] = hasher.hash(data["password"])
    return crud.update_user(db, current_user, data)


@router.post("/logout", response_model=schemas.Message)
def logout(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Clear the API token of the authenticated user."""
    crud.set_user_token(db, current_user, None)
    logger.info("User %s logged out", current_user.username)
    return schemas.Message(message="Logout successful")
