"""
tradebook/dependencies.py

FastAPI dependencies shared by the routers.

Process-wide objects (Settings, TokenIssuer, PasswordHasher) are created once
in main.create_app() and stored on app.state; these helpers only read them.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tradebook.config import Settings
from tradebook.database import get_db
from tradebook.errors import InvalidToken
from tradebook.services.auth import SessionService
from tradebook.services.guard import ResourceGuard
from tradebook.utils.auth import TokenClaims, TokenIssuer
from tradebook.utils.passwords import PasswordHasher

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_session_service(
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> SessionService:
    return SessionService(db, issuer, hasher)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """
    Verify the bearer access token. Missing, tampered, malformed and expired
    tokens all end in a 401; expired ones carry code 'token_expired' so the
    client knows a silent refresh is worth trying.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidToken("Not authenticated.")
    return issuer.verify_access(credentials.credentials)


def get_current_user_id(claims: TokenClaims = Depends(get_current_claims)) -> str:
    return claims.subject


def get_resource_guard(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> ResourceGuard:
    return ResourceGuard(db, user_id)
