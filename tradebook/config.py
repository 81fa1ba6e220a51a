"""
tradebook/config.py

Process-wide configuration for the Tradebook API.

Everything the session layer needs from the environment is read exactly once,
at application construction, into an immutable Settings object. Request
handlers receive that object (or the TokenIssuer built from it) through
app.state and never consult os.environ themselves.

Required:
 - JWT_SECRET          signs access tokens
 - JWT_REFRESH_SECRET  signs refresh tokens (must differ from JWT_SECRET)

Optional:
 - CORS_ALLOW_ORIGINS, COOKIE_SECURE, BCRYPT_ROUNDS, LOG_LEVEL
"""

import os
from dataclasses import dataclass, field
from typing import Tuple

from dotenv import load_dotenv

from tradebook.errors import ConfigError

# Load environment variables from a .env file at the project root
load_dotenv()

# Default CORS origins if none specified (dev environment)
DEFAULT_ORIGINS = (
    "http://127.0.0.1:3000,"
    "http://localhost:3000,"
    "http://127.0.0.1:5173,"
    "http://localhost:5173"
)

# Read by tradebook/database.py, which owns the engine
DEFAULT_DATABASE_URL = "sqlite:///./tradebook.db"

# Cost factor for bcrypt; 12 rounds is roughly 100-250ms on commodity hardware.
BCRYPT_ROUNDS = 12


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Immutable configuration snapshot.

    jwt_secret / jwt_refresh_secret are kept separate so that leaking the
    access secret alone cannot be used to forge a 7-day refresh token.
    """
    jwt_secret: str = field(repr=False)
    jwt_refresh_secret: str = field(repr=False)
    allowed_origins: Tuple[str, ...] = ()
    cookie_secure: bool = False
    bcrypt_rounds: int = BCRYPT_ROUNDS
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Build Settings from the process environment.

    Raises:
        ConfigError: if either signing secret is missing or both are equal.
    """
    jwt_secret = os.getenv("JWT_SECRET", "").strip()
    refresh_secret = os.getenv("JWT_REFRESH_SECRET", "").strip()

    if not jwt_secret:
        raise ConfigError("JWT_SECRET is not set")
    if not refresh_secret:
        raise ConfigError("JWT_REFRESH_SECRET is not set")
    if jwt_secret == refresh_secret:
        raise ConfigError("JWT_SECRET and JWT_REFRESH_SECRET must differ")

    raw_origins = os.getenv("CORS_ALLOW_ORIGINS", DEFAULT_ORIGINS)
    origins = tuple(origin.strip() for origin in raw_origins.split(",") if origin.strip())

    raw_rounds = os.getenv("BCRYPT_ROUNDS", str(BCRYPT_ROUNDS))
    try:
        rounds = int(raw_rounds)
    except ValueError:
        raise ConfigError(f"BCRYPT_ROUNDS must be an integer, got {raw_rounds!r}")
    if not 4 <= rounds <= 31:
        raise ConfigError("BCRYPT_ROUNDS must be between 4 and 31")

    return Settings(
        jwt_secret=jwt_secret,
        jwt_refresh_secret=refresh_secret,
        allowed_origins=origins,
        cookie_secure=_env_flag("COOKIE_SECURE"),
        bcrypt_rounds=rounds,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
