"""Address routes, nested under a contact of the current user."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from . import schemas, crud
from .database import get_db
from .auth import get_current_user
from .models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts/{contact_id}/addresses", tags=["addresses"])


@router.post("", response_model=schemas.AddressOut, status_code=201)
def create_address(
    contact_id: int,
    address_in: schemas.AddressCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add an address to a contact of the current user.

    Args:
        contact_id (int): Parent contact identifier.
        address_in (AddressCreate): Address input data.
        db (Session): Database session.
        current_user (User): Authenticated user.

    Raises:
        NotFound: If the contact is not found.

    Returns:
        AddressOut: Created address.
    """
    contact = crud.resolve_contact(db, current_user, contact_id)
    address = crud.create_address(db, contact, address_in)
    logger.info("Contact %s got address %s", contact.id, address.id)
    return address


@router.put("/{address_id}", response_model=schemas.AddressOut)
def update_address(
    contact_id: int,
    address_id: int,
    changes: schemas.AddressUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update an address. Only fields provided in the request are changed.

    Raises:
        NotFound: If the contact or the address is not found.
    """
    address = crud.resolve_address(db, current_user, contact_id, address_id)
    return crud.update_address(db, address, changes.model_dump(exclude_unset=True))


@router.delete(
    "/{address_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def remove_address(
    contact_id: int,
    address_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    address = crud.resolve_address(db, current_user, contact_id, address_id)
    crud.delete_address(db, address)
    logger.info("Contact %s lost address %s", contact_id, address_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
