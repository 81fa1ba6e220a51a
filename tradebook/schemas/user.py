"""
tradebook/schemas/user.py

Pydantic schemas for sign-up, sign-in and reading users.

The client supplies a raw 'password'; hashing happens in the service layer.
UserRead has no password field at all, so a hash can never be serialized.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 6


def clean_text(v: str) -> str:
    """Strip surrounding whitespace; a blank result is invalid."""
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class UserBase(BaseModel):
    """
    Shared user fields. 'email' is the sign-in identifier; 'username' is
    a unique public handle.
    """
    email: EmailStr
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=255)

    @field_validator("email")
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name", "username")
    def strip_text(cls, v: str) -> str:
        return clean_text(v)


class UserCreate(UserBase):
    """
    For signing up. Length is checked again by the service so that the
    rule holds for callers that bypass HTTP.
    """
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class UserSignIn(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserRead(BaseModel):
    """
    Schema for returning user data to clients.
    Includes the DB 'id' but excludes the hashed password.
    """
    id: str
    email: str
    name: str
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
