"""
tradebook/schemas/profile.py

Profile read/update and change-password payloads.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from tradebook.schemas.account import validate_currency
from tradebook.schemas.user import MIN_PASSWORD_LENGTH, UserRead, clean_text


class InvestmentProfileData(BaseModel):
    """Optional investor questionnaire. Every answer may be left empty."""
    age: Optional[int] = Field(default=None, ge=0, le=150)
    max_acceptable_short_term_loss_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    expected_annualized_rate_of_return: Optional[int] = None
    time_horizon: Optional[str] = Field(default=None, max_length=64)
    years_investing: Optional[int] = Field(default=None, ge=0)
    monthly_cash_flow: Optional[Decimal] = None
    default_currency: Optional[str] = None

    @field_validator("default_currency")
    def currency_must_be_valid(cls, v):
        if v is not None:
            return validate_currency(v)
        return v

    model_config = ConfigDict(from_attributes=True)


class ProfileRead(UserRead):
    investment_profile: Optional[InvestmentProfileData] = None


class ProfileUpdate(BaseModel):
    """
    Partial profile update. name/username are only written when sent;
    investment_profile, when sent, replaces the stored questionnaire. None
    of the three may be sent as null.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    username: Optional[str] = Field(default=None, min_length=1, max_length=255)
    investment_profile: Optional[InvestmentProfileData] = None

    @field_validator("name", "username")
    def strip_text(cls, v: str | None) -> str | None:
        if v is not None:
            return clean_text(v)
        return v

    @model_validator(mode="after")
    def reject_nulls(self):
        for name in ("name", "username", "investment_profile"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be null")
        return self


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)
