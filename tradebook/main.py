#!/usr/bin/env python
"""
tradebook/main.py

Sets up the FastAPI application for Tradebook, a personal portfolio and
trade journal API.

Key Roles:
 - Loads Settings once and fails fast if a signing secret is missing
 - Builds the TokenIssuer and PasswordHasher shared by every request
 - Adds CORS middleware for frontend integration
 - Includes 'auth', 'profile', 'account', 'trade' and 'holding' routers

Run with:
    uvicorn tradebook.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradebook.config import Settings, load_settings
from tradebook.database import create_tables
from tradebook.error_handlers import register_error_handlers
from tradebook.routers import account, auth, holding, profile, trade
from tradebook.utils.auth import TokenIssuer
from tradebook.utils.passwords import PasswordHasher

logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# Database: Create Tables at Startup
# ---------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensures tables are created (if not already) when the server starts.
    This won't delete or overwrite existing data; it's idempotent.
    """
    create_tables()
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application. Raises ConfigError before anything is served if
    JWT_SECRET or JWT_REFRESH_SECRET is missing.
    """
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Tradebook API",
        description=(
            "Accounts, trades and holdings for personal investors. "
            "JWT access tokens with rotating HttpOnly refresh cookies."
        ),
        version="1.0",
        redirect_slashes=True,
        lifespan=lifespan,
    )

    # ---------------------------------------------------------
    # Process-wide collaborators (immutable after startup)
    # ---------------------------------------------------------
    app.state.settings = settings
    app.state.token_issuer = TokenIssuer.from_settings(settings)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # ---------------------------------------------------------
    # CORS Middleware
    # ---------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,  # the refresh cookie must cross origins
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    register_error_handlers(app)

    # ---------------------------------------------------------
    # Routers
    # ---------------------------------------------------------
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
    app.include_router(account.router, prefix="/api/accounts", tags=["accounts"])
    app.include_router(trade.router, prefix="/api/trades", tags=["trades"])
    app.include_router(holding.router, prefix="/api/holdings", tags=["holdings"])

    @app.get("/")
    def read_root():
        """
        Basic root path to confirm the API is running.
        """
        return {"message": "Welcome to Tradebook!"}

    logger.info("Tradebook API configured")
    return app


app = create_app()
