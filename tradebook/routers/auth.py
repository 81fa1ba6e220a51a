"""
tradebook/routers/auth.py

Sign-up, sign-in, refresh and logout endpoints.

Token transport:
 - the access token is returned in the JSON body and kept in memory by the
   client
 - the refresh token is only ever sent as the HttpOnly 'refresh_token'
   cookie (Path=/, Max-Age=7 days, Secure when COOKIE_SECURE is on)
"""

from fastapi import APIRouter, Cookie, Depends, Response, status

from tradebook.config import Settings
from tradebook.dependencies import get_session_service, get_settings
from tradebook.errors import InvalidToken
from tradebook.schemas.auth import MessageResponse, SignInResponse, TokenResponse
from tradebook.schemas.user import UserCreate, UserRead, UserSignIn
from tradebook.services.auth import SessionService
from tradebook.utils.auth import REFRESH_TOKEN_LIFETIME

router = APIRouter(tags=["auth"])

REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_COOKIE_MAX_AGE = int(REFRESH_TOKEN_LIFETIME.total_seconds())


def set_refresh_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=token,
        max_age=REFRESH_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    """Overwrite the cookie with an empty value that expires immediately."""
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value="",
        max_age=0,
        expires=0,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post("/sign-up", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def sign_up(user: UserCreate, sessions: SessionService = Depends(get_session_service)):
    """
    Register a new user: POST /api/auth/sign-up

    Returns the created user (never the password hash).
    409 if the email or username is already registered.
    """
    return sessions.sign_up(user.email, user.name, user.username, user.password)


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(
    credentials: UserSignIn,
    response: Response,
    sessions: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange email + password for an access token (body) and a refresh
    token (HttpOnly cookie). Wrong email and wrong password get the same 401.
    """
    result = sessions.sign_in(credentials.email, credentials.password)
    set_refresh_cookie(response, result.tokens.refresh_token, settings)
    return SignInResponse(token=result.tokens.access_token, user=UserRead.model_validate(result.user))


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(
    response: Response,
    refresh_token: str | None = Cookie(default=None),
    sessions: SessionService = Depends(get_session_service),
    settings: Settings = Depends(get_settings),
):
    """
    Rotate the session: the refresh cookie is verified and replaced by a new
    one, and a new access token is returned. The previous refresh token is
    not revoked server-side; it simply stops being sent by the browser.
    """
    if not refresh_token:
        raise InvalidToken("Refresh token missing.")
    tokens = sessions.refresh(refresh_token)
    set_refresh_cookie(response, tokens.refresh_token, settings)
    return TokenResponse(token=tokens.access_token)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response, settings: Settings = Depends(get_settings)):
    """
    Clear the refresh cookie. Access tokens already issued stay valid until
    they expire (at most 15 minutes).
    """
    clear_refresh_cookie(response, settings)
    return MessageResponse(message="Logged out")
