# =============================================================================
# core/models/transaction.py - Transaction Schemas
# =============================================================================
# These models define the API contract for transaction operations:
# - TransactionType: Enum for income (INGRESO) / expense (EGRESO)
# - TransactionCreate: Input for recording a new transaction
# - TransactionUpdate: Partial input where every field is present or absent
# - Transaction: Output, joined with the owner who recorded it
#
# Field names are snake_case in Python and in the database; the API
# speaks camelCase (userId, createdAt) through aliases.
# =============================================================================

import datetime as dt
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from lib.utils import is_positive_finite, parse_calendar_date


class TransactionType(str, Enum):
    """
    Direction of a financial movement.

    - INGRESO: income, adds to the balance
    - EGRESO: expense, subtracts from the balance
    """
    INGRESO = "INGRESO"
    EGRESO = "EGRESO"


UPDATABLE_FIELDS = ("concept", "amount", "date", "type")


def _check_amount_type(value: Any) -> Any:
    # bool is an int subclass and numeric strings would otherwise be coerced
    if value is None:
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


def _check_amount_value(value: float | None) -> float | None:
    if value is not None and not is_positive_finite(value):
        raise ValueError("must be a finite number greater than 0")
    return value


def _check_concept(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _coerce_date(value: Any) -> Any:
    if value is None:
        return value
    return parse_calendar_date(value)


class TransactionOwner(BaseModel):
    """The user who recorded a transaction (projection of users)."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str | None = None
    email: str | None = None


class TransactionCreate(BaseModel):
    """
    Schema for recording a new transaction.

    All four fields are required. The owner is never taken from the
    payload; it is the authenticated user making the request.

    Example:
        {
            "concept": "Pago de nómina",
            "amount": 5000.00,
            "date": "2024-01-15",
            "type": "INGRESO"
        }
    """

    concept: str = Field(..., description="Free text description")
    amount: float = Field(..., description="Positive amount")
    date: dt.date = Field(..., description="Calendar date (YYYY-MM-DD)")
    type: TransactionType = Field(..., description="INGRESO or EGRESO")

    check_concept = field_validator("concept")(_check_concept)
    check_amount_type = field_validator("amount", mode="before")(_check_amount_type)
    check_amount_value = field_validator("amount")(_check_amount_value)
    coerce_date = field_validator("date", mode="before")(_coerce_date)

    def to_row(self, user_id: str) -> dict[str, Any]:
        """Database row for this transaction, owned by user_id."""
        row = self.model_dump(mode="json")
        row["user_id"] = user_id
        return row


class TransactionUpdate(BaseModel):
    """
    Schema for a partial transaction update.

    Each field is either present (validated like on create) or absent.
    A field sent as null counts as absent. At least one field must be
    present.
    """

    concept: str | None = None
    amount: float | None = None
    date: dt.date | None = None
    type: TransactionType | None = None

    check_concept = field_validator("concept")(_check_concept)
    check_amount_type = field_validator("amount", mode="before")(_check_amount_type)
    check_amount_value = field_validator("amount")(_check_amount_value)
    coerce_date = field_validator("date", mode="before")(_coerce_date)

    @model_validator(mode="after")
    def require_one_field(self) -> "TransactionUpdate":
        if not self.changes():
            raise ValueError(
                f"Provide at least one field to update: {', '.join(UPDATABLE_FIELDS)}"
            )
        return self

    def changes(self) -> dict[str, Any]:
        """Only the present fields, ready to be written to the database."""
        return self.model_dump(mode="json", exclude_none=True)


class Transaction(BaseModel):
    """
    Schema for returning a transaction to clients.

    Example:
        {
            "id": "8a1f...",
            "concept": "Pago de nómina",
            "amount": 5000.0,
            "date": "2024-01-15",
            "type": "INGRESO",
            "userId": "github|123",
            "createdAt": "2024-01-15T10:30:00Z",
            "user": {"id": "github|123", "name": "Ana", "email": "ana@example.com"}
        }
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: str
    concept: str
    amount: float
    date: dt.date
    type: TransactionType
    user_id: str | None = None
    created_at: dt.datetime | None = None
    user: TransactionOwner | None = None

    coerce_date = field_validator("date", mode="before")(_coerce_date)
