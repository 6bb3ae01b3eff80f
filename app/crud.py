"""CRUD operations for users, contacts and addresses.

This module contains database interaction logic for user, contact and
address entities, isolated from FastAPI route handlers. Contacts and
addresses are only ever reached through ``resolve_contact`` and
``resolve_address``, which treat "not yours" exactly like "does not
exist".
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from . import models, schemas
from .errors import NotFound, ValidationError

#: Largest id a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def _storable_id(value: int) -> bool:
    return 0 < value <= MAX_ID


def create_user(
    db: Session, user_in: schemas.UserCreate, hashed_password: str, token: str
) -> models.User:
    """
    Create and persist a new user.

    Args:
        db (Session): SQLAlchemy database session.
        user_in (UserCreate): Incoming user data.
        hashed_password (str): Securely hashed password.
        token (str): Initial API token.

    Raises:
        ValidationError: If the username is already taken.

    Returns:
        User: Newly created user instance.
    """
    user = models.User(
        username=user_in.username,
        password=hashed_password,
        name=user_in.name,
        token=token,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationError("Username already registered")
    db.refresh(user)
    return user


def get_user_by_username(db: Session, username: str) -> models.User | None:
    """
    Retrieve a user by username.

    Args:
        db (Session): Database session.
        username (str): Login name.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.execute(
        select(models.User).where(models.User.username == username)
    ).scalar_one_or_none()


def get_user_by_token(db: Session, token: str) -> models.User | None:
    """
    Retrieve the user currently holding an API token.

    Args:
        db (Session): Database session.
        token (str): Exact token value.

    Returns:
        User | None: User if found, otherwise ``None``.
    """
    return db.execute(
        select(models.User).where(models.User.token == token)
    ).scalar_one_or_none()


def set_user_token(db: Session, user: models.User, token: str | None) -> models.User:
    """
    Replace or clear the API token of a user.

    Args:
        db (Session): Database session.
        user (User): Target user.
        token (str | None): New token, ``None`` ends the session.

    Returns:
        User: Updated user instance.
    """
    user.token = token
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: models.User, changes: dict) -> models.User:
    """
    Update profile fields of a user.

    Args:
        db (Session): Database session.
        user (User): Target user.
        changes (dict): Fields to update, password already hashed.

    Returns:
        User: Updated user instance.
    """
    for key, value in changes.items():
        setattr(user, key, value)

    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_contacts(db: Session, user: models.User):
    """
    Retrieve all contacts of the given user with their addresses.

    Args:
        db (Session): Database session.
        user (User): Contact owner.

    Returns:
        list[Contact]: List of contacts.
    """
    stmt = (
        select(models.Contact)
        .where(models.Contact.user_id == user.id)
        .options(selectinload(models.Contact.addresses))
    )
    return db.scalars(stmt).all()


def create_contact(
    db: Session, contact_in: schemas.ContactCreate, user: models.User
) -> models.Contact:
    """
    Create a new contact owned by the given user.

    Args:
        db (Session): Database session.
        contact_in (ContactCreate): Contact data.
        user (User): Owner of the contact.

    Returns:
        Contact: Newly created contact.
    """
    contact = models.Contact(**contact_in.model_dump(), user_id=user.id)
    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def resolve_contact(db: Session, user: models.User, contact_id: int) -> models.Contact:
    """
    Retrieve a contact owned by the given user.

    Args:
        db (Session): Database session.
        user (User): Caller.
        contact_id (int): Contact identifier.

    Raises:
        NotFound: If the contact does not exist or belongs to someone else.

    Returns:
        Contact: The owned contact.
    """
    if not _storable_id(contact_id):
        raise NotFound("Contact not found")
    contact = db.execute(
        select(models.Contact).where(
            models.Contact.id == contact_id,
            models.Contact.user_id == user.id,
        )
    ).scalar_one_or_none()
    if contact is None:
        raise NotFound("Contact not found")
    return contact


def update_contact(db: Session, contact: models.Contact, changes: dict):
    """
    Update mutable fields of a contact.

    Args:
        db (Session): Database session.
        contact (Contact): Contact instance.
        changes (dict): Fields to update.

    Returns:
        Contact: Updated contact.
    """
    for key, value in changes.items():
        setattr(contact, key, value)

    db.add(contact)
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact: models.Contact):
    """
    Delete a contact and its addresses from the database.

    Args:
        db (Session): Database session.
        contact (Contact): Contact to delete.
    """
    db.delete(contact)
    db.commit()
    return None


def create_address(
    db: Session, contact: models.Contact, address_in: schemas.AddressCreate
) -> models.Address:
    """
    Create a new address for an already resolved contact.

    Args:
        db (Session): Database session.
        contact (Contact): Parent contact.
        address_in (AddressCreate): Address data.

    Returns:
        Address: Newly created address.
    """
    address = models.Address(**address_in.model_dump(), contact_id=contact.id)
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def resolve_address(
    db: Session, user: models.User, contact_id: int, address_id: int
) -> models.Address:
    """
    Retrieve an address through a contact owned by the given user.

    Args:
        db (Session): Database session.
        user (User): Caller.
        contact_id (int): Parent contact identifier.
        address_id (int): Address identifier.

    Raises:
        NotFound: If the contact is not owned by the caller or the
            address does not belong to that contact.

    Returns:
        Address: The reachable address.
    """
    contact = resolve_contact(db, user, contact_id)
    if not _storable_id(address_id):
        raise NotFound("Address not found")
    address = db.execute(
        select(models.Address).where(
            models.Address.id == address_id,
            models.Address.contact_id == contact.id,
        )
    ).scalar_one_or_none()
    if address is None:
        raise NotFound("Address not found")
    return address


def update_address(db: Session, address: models.Address, changes: dict):
    """
    Update mutable fields of an address.

    Args:
        db (Session): Database session.
        address (Address): Address instance.
        changes (dict): Fields to update.

    Returns:
        Address: Updated address.
    """
    for key, value in changes.items():
        setattr(address, key, value)

    db.add(address)
    db.commit()
    db.refresh(address)
    return address


def delete_address(db: Session, address: models.Address):
    """Delete an address from the database."""
    db.delete(address)
    db.commit()
    return None
