"""
tradebook/errors.py

Domain exceptions for the session and authorization layer.

Each exception carries the HTTP status, a stable machine-readable code and a
user-facing detail message. The mapping to responses lives in
tradebook/error_handlers.py so services never import FastAPI.
"""


class TradebookError(Exception):
    """Base class for all expected, user-facing failures."""

    status_code = 500
    code = "internal_error"
    detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ConfigError(TradebookError):
    """A required setting (e.g. a signing secret) is missing or invalid."""

    code = "config_error"
    detail = "Server misconfigured"


class InternalError(TradebookError):
    """An operation failed for a reason the caller cannot fix."""


class InvalidCredentials(TradebookError):
    """Wrong email or password. Deliberately does not say which."""

    status_code = 401
    code = "invalid_credentials"
    detail = "Invalid email or password."


class ConflictError(TradebookError):
    status_code = 409
    code = "conflict"
    detail = "Email or username already registered."


class PasswordTooShort(TradebookError):
    status_code = 422
    code = "password_too_short"
    detail = "Password must be at least 6 characters."


class InvalidToken(TradebookError):
    """Token failed verification: bad signature, bad format, or expired."""

    status_code = 401
    code = "invalid_token"
    detail = "Invalid token."


class InvalidSignature(InvalidToken):
    """Signature or signing algorithm does not match."""


class MalformedToken(InvalidToken):
    """Token cannot be decoded or lacks required claims."""


class TokenExpired(InvalidToken):
    """Signature is valid but the token is past its exp claim."""

    code = "token_expired"
    detail = "Token expired."


class NotFoundOrUnauthorized(TradebookError):
    """
    Resource does not exist or belongs to someone else.

    The two cases are intentionally reported the same way so that callers
    cannot probe for other users' records.
    """

    status_code = 404
    code = "not_found"
    detail = "Resource not found."


class NoFieldsProvided(TradebookError):
    status_code = 400
    code = "no_fields_provided"
    detail = "No fields to update."


class PasswordTooLong(TradebookError):
    status_code = 422
    code = "password_too_long"
    detail = "Password must be at most 72 bytes."
