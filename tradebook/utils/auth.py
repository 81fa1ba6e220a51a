"""
tradebook/utils/auth.py

JWT issuing and verification for the session layer.

Two token kinds share one claim shape ({sub, email, iat, exp, jti}) but are
signed with different secrets:
 - access tokens live 15 minutes and travel in the Authorization header
 - refresh tokens live 7 days and travel only in an HttpOnly cookie

Verification failures are reported as three distinct exceptions so callers
can react differently: TokenExpired (refresh silently), InvalidSignature and
MalformedToken (force a new sign-in).
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from tradebook.errors import ConfigError, InvalidSignature, MalformedToken, TokenExpired

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 15
REFRESH_TOKEN_EXPIRE_DAYS = 7

ACCESS_TOKEN_LIFETIME = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
REFRESH_TOKEN_LIFETIME = timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of an access or refresh token."""
    subject: str
    email: str
    issued_at: Optional[datetime]
    expires_at: datetime
    token_id: str


class TokenIssuer:
    """
    Mints and verifies HS256 tokens.

    Both secrets are required at construction time; a TokenIssuer that exists
    can always sign. Build one per process from Settings and share it: it
    holds no mutable state.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not access_secret:
            raise ConfigError("Access token secret is not set")
        if not refresh_secret:
            raise ConfigError("Refresh token secret is not set")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._clock = clock

    @classmethod
    def from_settings(cls, settings) -> "TokenIssuer":
        return cls(settings.jwt_secret, settings.jwt_refresh_secret)

    # ------------------------------------------------------------------
    # Issuing
    # ------------------------------------------------------------------
    def _issue(self, subject_id: str, email: str, secret: str, lifetime: timedelta) -> str:
        now = self._clock()
        to_encode = {
            "sub": str(subject_id),
            "email": email,
            "iat": now,
            "exp": now + lifetime,
            # Makes every token unique, even two minted in the same second
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, secret, algorithm=ALGORITHM)

    def issue_access(self, subject_id: str, email: str) -> str:
        """Generate a 15-minute access token for subject_id."""
        return self._issue(subject_id, email, self._access_secret, ACCESS_TOKEN_LIFETIME)

    def issue_refresh(self, subject_id: str, email: str) -> str:
        """Generate a 7-day refresh token for subject_id."""
        return self._issue(subject_id, email, self._refresh_secret, REFRESH_TOKEN_LIFETIME)

    def issue_pair(self, subject_id: str, email: str) -> tuple[str, str]:
        return self.issue_access(subject_id, email), self.issue_refresh(subject_id, email)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify_access(self, token: str) -> TokenClaims:
        return self.verify(token, self._access_secret)

    def verify_refresh(self, token: str) -> TokenClaims:
        return self.verify(token, self._refresh_secret)

    @staticmethod
    def verify(token: str, secret: str) -> TokenClaims:
        """
        Check signature, algorithm and expiry, then required claims.

        Raises:
            MalformedToken: token cannot be parsed or lacks sub/email.
            InvalidSignature: algorithm is not HS256 or the signature is wrong.
            TokenExpired: signature is fine but exp has passed.
        """
        if not token:
            raise MalformedToken("Token missing.")

        try:
            header = jwt.get_unverified_header(token)
        except JWTError:
            raise MalformedToken()

        if header.get("alg") != ALGORITHM:
            raise InvalidSignature()

        try:
            payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            raise TokenExpired()
        except JWTClaimsError:
            raise MalformedToken()
        except JWTError:
            raise InvalidSignature()

        subject = payload.get("sub")
        email = payload.get("email")
        exp = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            raise MalformedToken()
        if not isinstance(email, str) or not email:
            raise MalformedToken()
        if not isinstance(exp, (int, float)):
            raise MalformedToken()

        iat = payload.get("iat")
        issued_at = (
            datetime.fromtimestamp(iat, tz=timezone.utc)
            if isinstance(iat, (int, float))
            else None
        )
        return TokenClaims(
            subject=subject,
            email=email,
            issued_at=issued_at,
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
            token_id=str(payload.get("jti", "")),
        )
