# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Input for creating a user (full record minus id/timestamps)
# - UserPatch: Partial update input, merged field-by-field
# - UserResponse: Output when returning a stored user to clients
# - UserDeleteResponse: Confirmation returned after a delete
#
# Validation happens here, before any database call, so an invalid payload
# never reaches the users collection.
# =============================================================================

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")

PASSWORD_MIN_LENGTH = 6


def _normalize_email(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _check_email_format(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email address")
    return value


class UserCreate(BaseModel):
    """
    Schema for creating a new user.

    Unknown keys (including id, createdAt, updatedAt) are ignored, so
    clients cannot choose system-managed values.

    Example:
        {
            "name": "John Doe",
            "email": "JOHN@X.com",
            "password": "secret1"
        }
    """

    model_config = ConfigDict(extra="ignore")

    # Display name, trimmed
    name: str = Field(
        ...,
        min_length=1,
        description="User's full name",
        examples=["John Doe"],
    )

    # Stored lowercase; uniqueness is enforced by the database
    email: str = Field(
        ...,
        min_length=1,
        description="Unique email address (stored lowercase)",
        examples=["john@x.com"],
    )

    # Stored as provided
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description=f"Password, at least {PASSWORD_MIN_LENGTH} characters",
        examples=["secret1"],
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        return _normalize_email(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email_format(value)

    def to_document(self) -> dict[str, Any]:
        """Fields to persist, without system-managed values."""
        return {
            "name": self.name,
            "email": self.email,
            "password": self.password,
        }


class UserPatch(BaseModel):
    """
    Partial update for a user.

    Only name and email can change. A field that is omitted, null, or
    blank keeps the stored value.

    Example:
        {"name": "Jane"}
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(
        default=None,
        description="New name (optional)"
    )

    email: str | None = Field(
        default=None,
        description="New email address (optional)"
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        value = _normalize_email(value)
        if value == "":
            return None
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return _check_email_format(value)

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.email is None

    def apply_to(self, document: dict[str, Any]) -> dict[str, Any]:
        """
        Merge this patch onto a stored document.

        Returns a new dict; the input document is not modified.
        """
        merged = dict(document)
        if self.name is not None:
            merged["name"] = self.name
        if self.email is not None:
            merged["email"] = self.email
        return merged


class UserResponse(BaseModel):
    """
    Schema for returning a user to clients.

    Returned by every user endpoint except delete.

    Example:
        {
            "id": "65f1c2a9e4b0a1b2c3d4e5f6",
            "name": "John Doe",
            "email": "john@x.com",
            "password": "secret1",
            "createdAt": "2024-01-15T10:30:00",
            "updatedAt": "2024-01-15T10:30:00"
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="24-character hex identifier")
    name: str
    email: str
    password: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "UserResponse":
        """Build a response from a raw Mongo document."""
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            email=document["email"],
            password=document["password"],
            created_at=document["createdAt"],
            updated_at=document["updatedAt"],
        )


class UserDeleteResponse(BaseModel):
    """Confirmation returned after a user is removed."""
    message: str = Field(default="User removed")
