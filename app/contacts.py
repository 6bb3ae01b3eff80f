"""Contact management routes for the Contacts API."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from . import schemas, crud
from .database import get_db
from .auth import get_current_user
from .models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=List[schemas.ContactOut])
def list_contacts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve all contacts belonging to the current user.

    Args:
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        list[ContactOut]: List of contacts.
    """
    return crud.get_contacts(db, user=current_user)


@router.post("", response_model=schemas.ContactOut, status_code=201)
def create_contact(
    contact_in: schemas.ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a new contact owned by the current user.

    Args:
        contact_in (ContactCreate): Contact input data.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Returns:
        ContactOut: Created contact.
    """
    contact = crud.create_contact(db, contact_in, current_user)
    logger.info("User %s created contact %s", current_user.id, contact.id)
    return contact


@router.get("/{contact_id}", response_model=schemas.ContactOut)
def get_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Retrieve a single contact by ID for the current user.

    Args:
        contact_id (int): Contact identifier.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        NotFound: If contact is not found.

    Returns:
        ContactOut: Contact data.
    """
    return crud.resolve_contact(db, current_user, contact_id)


@router.put("/{contact_id}", response_model=schemas.ContactOut)
def update_contact(
    contact_id: int,
    changes: schemas.ContactUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an existing contact.

    Only fields provided in the request will be updated.

    Args:
        contact_id (int): Contact identifier.
        changes (ContactUpdate): Fields to update.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        NotFound: If contact is not found.

    Returns:
        ContactOut: Updated contact.
    """
    c = crud.resolve_contact(db, current_user, contact_id)
    return crud.update_contact(db, c, changes.model_dump(exclude_unset=True))


@router.delete(
    "/{contact_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def remove_contact(
    contact_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a contact owned by the current user together with its addresses.

    Raises:
        NotFound: If contact is not found.
    """
    c = crud.resolve_contact(db, current_user, contact_id)
    crud.delete_contact(db, c)
    logger.info("User %s deleted contact %s", current_user.id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
