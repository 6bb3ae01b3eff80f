from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    computed_field,
    field_validator,
)
from typing import List, Optional


class AddressBase(BaseModel):
    """Shared fields for address schemas."""

    street: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    province: Optional[str] = Field(None, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=10)


class AddressCreate(AddressBase):
    """Schema for creating new address."""

    country: str = Field(min_length=1, max_length=100)


class AddressUpdate(AddressBase):
    """Schema for updating address (all fields optional)."""

    country: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("country")
    @classmethod
    def country_not_null(cls, value):
        if value is None:
            raise ValueError("country may not be null")
        return value


class AddressOut(AddressBase):
    """Schema for returning address with ID."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    country: str


class ContactBase(BaseModel):
    """Shared fields for contact schemas."""

    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)


class ContactCreate(ContactBase):
    """Schema for creating new contact."""

    first_name: str = Field(min_length=1, max_length=100)


class ContactUpdate(ContactBase):
    """Schema for updating contact (all fields optional)."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("first_name")
    @classmethod
    def first_name_not_null(cls, value):
        if value is None:
            raise ValueError("first_name may not be null")
        return value


class ContactOut(BaseModel):
    """Schema for returning contact with its addresses.

    ``first_name`` and ``last_name`` are read from the model but only
    exposed joined together as ``name``.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str = Field(exclude=True)
    last_name: Optional[str] = Field(None, exclude=True)
    email: Optional[str] = None
    phone: Optional[str] = None
    addresses: List[AddressOut] = []

    @computed_field
    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()


# bcrypt ignores everything past the first 72 bytes
MAX_PASSWORD_BYTES = 72


def check_password_bytes(value):
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password may not exceed {MAX_PASSWORD_BYTES} bytes")
    return value


class UserBase(BaseModel):
    """Shared fields for user schemas."""

    username: str = Field(min_length=1, max_length=100)


class UserCreate(UserBase):
    """Payload for registering a new user."""

    password: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class UserLogin(UserBase):
    """Payload for logging in."""

    password: str = Field(min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class UserUpdate(BaseModel):
    """Payload for updating the current user.

    Fields that are absent, null or empty are left unchanged.
    """

    name: Optional[str] = Field(None, max_length=100)
    password: Optional[str] = Field(None, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value):
        return check_password_bytes(value)


class UserOut(BaseModel):
    """Response schema for user data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str


class UserTokenOut(UserOut):
    """Response schema for user data together with the issued API token."""

    token: str


class Message(BaseModel):
    """Plain acknowledgement message."""

    message: str
