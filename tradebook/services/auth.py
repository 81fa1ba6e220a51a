"""
tradebook/services/auth.py

SessionService: sign-up, sign-in, refresh-token rotation and password
change. Logout has no server-side state to touch; routers/auth.py clears the
refresh cookie.

Session states:
    Anonymous --sign_in--> Authenticated --logout--> Anonymous
    Authenticated --refresh--> Authenticated (same subject, new token pair)

Tokens are stateless. Refreshing hands out a new refresh token but does not
revoke the old one: there is no server-side allow-list, so a leaked refresh
token stays usable until its own 7-day expiry. Logout only clears the cookie;
an access token already handed out stays valid for up to 15 minutes.
"""

import logging
from dataclasses import dataclass

from jose.exceptions import JOSEError
from sqlalchemy.orm import Session

from tradebook.errors import InternalError, InvalidCredentials, PasswordTooLong, PasswordTooShort
from tradebook.models.user import User
from tradebook.schemas.user import MIN_PASSWORD_LENGTH
from tradebook.services import user as user_store
from tradebook.utils.auth import TokenIssuer
from tradebook.utils.passwords import PasswordHasher

logger = logging.getLogger(__name__)


@dataclass
class SessionTokens:
    access_token: str
    refresh_token: str


@dataclass
class SignInResult:
    tokens: SessionTokens
    user: User


class SessionService:
    """
    Orchestrates the credential store, password hasher and token issuer.
    One instance per request; it holds the request's DB session.
    """

    def __init__(self, db: Session, issuer: TokenIssuer, hasher: PasswordHasher):
        self.db = db
        self.issuer = issuer
        self.hasher = hasher

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_length(password: str) -> None:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShort()

    def _hash(self, password: str) -> str:
        try:
            return self.hasher.hash(password)
        except ValueError as exc:
            raise PasswordTooLong() from exc

    def _issue_pair(self, subject_id: str, email: str) -> SessionTokens:
        try:
            access, refresh = self.issuer.issue_pair(subject_id, email)
        except JOSEError as exc:
            logger.error("Token issuance failed for user_id=%s", subject_id)
            raise InternalError("Failed to generate tokens") from exc
        return SessionTokens(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def sign_up(self, email: str, name: str, username: str, password: str) -> User:
        """
        Create a user.

        Steps:
          1) Reject passwords shorter than the minimum.
          2) Hash the password.
          3) Insert; duplicate email or username -> ConflictError.
        """
        self._check_length(password)
        password_hash = self._hash(password)
        new_user = user_store.create_user(email, name, username, password_hash, self.db)
        logger.info("User signed up: user_id=%s", new_user.id)
        return new_user

    def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Verify credentials and issue an access/refresh pair.

        An unknown email and a wrong password raise the same
        InvalidCredentials, with the same message, so the endpoint cannot be
        used to discover which emails are registered.
        """
        user = user_store.get_user_by_email(email, self.db)
        if user is None:
            # Burn the same bcrypt time as a real check
            self.hasher.verify(self.hasher.dummy_hash, password)
            logger.info("Sign-in failed: unknown email")
            raise InvalidCredentials()

        if not self.hasher.verify(user.password_hash, password):
            logger.info("Sign-in failed: bad password for user_id=%s", user.id)
            raise InvalidCredentials()

        tokens = self._issue_pair(user.id, user.email)
        logger.info("User signed in: user_id=%s", user.id)
        return SignInResult(tokens=tokens, user=user)

    def refresh(self, refresh_token: str) -> SessionTokens:
        """
        Rotate: verify the refresh token and mint a brand new pair for the
        same subject. Raises the InvalidToken family (TokenExpired,
        InvalidSignature, MalformedToken) on failure; nothing is issued then.
        """
        claims = self.issuer.verify_refresh(refresh_token)
        tokens = self._issue_pair(claims.subject, claims.email)
        logger.info("Refresh token rotated for user_id=%s", claims.subject)
        return tokens

    def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        """
        Replace the password after re-verifying the current one.
        A wrong current password raises InvalidCredentials.
        """
        user = user_store.get_user_by_id(user_id, self.db)
        if user is None or not self.hasher.verify(user.password_hash, current_password):
            logger.info("Password change rejected for user_id=%s", user_id)
            raise InvalidCredentials("Current password is incorrect.")

        self._check_length(new_password)
        user_store.update_password_hash(user, self._hash(new_password), self.db)
        logger.info("Password changed for user_id=%s", user_id)
