"""
tradebook/schemas/auth.py

Response bodies for the session endpoints. Only the access token is ever
placed in a body; the refresh token goes out as a cookie.
"""

from pydantic import BaseModel

from tradebook.schemas.user import UserRead


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class SignInResponse(TokenResponse):
    user: UserRead


class MessageResponse(BaseModel):
    message: str
