"""
tradebook/schemas/trade.py

Pydantic schemas for Trade create / partial update / read.

- TradeCreate: every field required except 'reason'
- TradeUpdate: every field optional; the set of fields actually sent is the
  patch (see TradeUpdate.patch). 'reason' may be sent as null to clear it.
- TradeRead: output, includes 'id' and audit timestamps
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tradebook.models.trade import AssetType, TradeType
from tradebook.schemas.account import validate_currency

# Columns that may legitimately be cleared with an explicit null
NULLABLE_FIELDS = {"reason"}


def normalize_ticker(v: str) -> str:
    v = v.strip().upper()
    if not v:
        raise ValueError("ticker must not be blank")
    return v


class TradeBase(BaseModel):
    type: TradeType
    asset_type: AssetType
    ticker: str = Field(max_length=32)
    trade_date: date
    quantity: Decimal = Field(gt=0)
    price: Decimal = Field(ge=0)
    currency: str
    account_id: str
    reason: Optional[str] = None

    @field_validator("ticker")
    def ticker_upper(cls, v: str) -> str:
        return normalize_ticker(v)

    @field_validator("currency")
    def currency_must_be_valid(cls, v: str) -> str:
        return validate_currency(v)


class TradeCreate(TradeBase):
    pass


class TradeUpdate(BaseModel):
    type: Optional[TradeType] = None
    asset_type: Optional[AssetType] = None
    ticker: Optional[str] = Field(default=None, max_length=32)
    trade_date: Optional[date] = None
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    price: Optional[Decimal] = Field(default=None, ge=0)
    currency: Optional[str] = None
    account_id: Optional[str] = None
    reason: Optional[str] = None

    @field_validator("ticker")
    def ticker_upper(cls, v: str | None) -> str | None:
        if v is not None:
            return normalize_ticker(v)
        return v

    @field_validator("currency")
    def currency_must_be_valid(cls, v: str | None) -> str | None:
        if v is not None:
            return validate_currency(v)
        return v

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in self.model_fields_set - NULLABLE_FIELDS:
            if getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be null")
        return self

    def patch(self) -> dict:
        """
        Field name -> new value, for exactly the fields present in the
        request body. Enum members are stored by value.
        """
        data = self.model_dump(exclude_unset=True)
        for key in ("type", "asset_type"):
            if key in data:
                data[key] = data[key].value
        return data


class TradeRead(TradeBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
