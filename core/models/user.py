# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - Role: Enum for the two access levels
# - User: Output projection returned by the users endpoints
# - UserUpdate: Partial input for admin edits (name and/or role)
#
# Users are created on their first successful sign-in and never deleted.
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """
    Access level of a user.

    - ADMIN: full mutation rights (transactions, users, reports)
    - USER: read-only access to transactions
    """
    ADMIN = "ADMIN"
    USER = "USER"


class User(BaseModel):
    """
    Schema for returning a user to clients.

    Example:
        {
            "id": "github|123",
            "name": "Ana Pérez",
            "email": "ana@example.com",
            "phone": null,
            "role": "ADMIN",
            "image": "https://avatars.githubusercontent.com/u/123",
            "createdAt": "2024-01-15T10:30:00Z"
        }
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str
    name: str
    email: str
    phone: str | None = None
    role: Role = Role.USER
    image: str | None = Field(default=None, description="Avatar image URL")
    created_at: dt.datetime | None = None


class UserUpdate(BaseModel):
    """
    Schema for an admin edit of a user.

    Both fields are optional but at least one must be present.
    """

    name: str | None = Field(default=None, max_length=255)
    role: Role | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        if not self.changes():
            raise ValueError("Provide at least one field to update: name, role")
        return self

    def changes(self) -> dict[str, Any]:
        """Only the present fields, ready to be written to the database."""
        return self.model_dump(mode="json", exclude_none=True)
