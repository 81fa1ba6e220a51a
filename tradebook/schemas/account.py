"""
tradebook/schemas/account.py

Defines Pydantic schemas for creating, updating, and reading Account objects.

There is no user_id on the input schemas: the owner is always the caller,
taken from the verified access token, never from the request body.
"""

import re
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3,5}$")


def validate_currency(v: str) -> str:
    v = v.strip().upper()
    if not CURRENCY_PATTERN.match(v):
        raise ValueError("currency must be a 3-5 letter code such as 'USD'")
    return v


class AccountBase(BaseModel):
    """
    Common fields for an Account.
    - 'name': a label like "Brokerage", "Savings", "Exchange"
    - 'currency': an uppercase code like "USD" or "TWD"
    - 'balance': cash balance in that currency
    """
    name: str = Field(min_length=1, max_length=255)
    currency: str
    balance: Decimal = Decimal("0")

    @field_validator("currency")
    def currency_must_be_valid(cls, v):
        return validate_currency(v)


class AccountCreate(AccountBase):
    pass


class AccountUpdate(BaseModel):
    """
    Partial update. Only the fields present in the request body are written;
    model_fields_set records which ones those are. Explicit nulls are
    rejected because every account column is NOT NULL.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    currency: Optional[str] = None
    balance: Optional[Decimal] = None

    @field_validator("currency")
    def currency_must_be_valid(cls, v):
        if v is not None:
            return validate_currency(v)
        return v

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be null")
        return self

    def patch(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class AccountRead(AccountBase):
    """
    Schema returned after fetching an Account.
    """
    id: str

    model_config = ConfigDict(from_attributes=True)
