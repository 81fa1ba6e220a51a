"""
tradebook/error_handlers.py

Maps domain exceptions to JSON responses of the form
    {"detail": "<message>", "code": "<machine code>"}

No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradebook.errors import ConfigError, InvalidToken, TradebookError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, detail: str, headers: dict | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application."""

    @app.exception_handler(InvalidToken)
    async def handle_invalid_token(_request: Request, exc: InvalidToken) -> JSONResponse:
        """401 with a Bearer challenge; expired and invalid differ only in code."""
        logger.info("Token rejected: %s", type(exc).__name__)
        return _error_response(
            exc.status_code,
            exc.code,
            exc.detail,
            headers={"WWW-Authenticate": f'Bearer error="{exc.code}"'},
        )

    @app.exception_handler(ConfigError)
    async def handle_config_error(_request: Request, exc: ConfigError) -> JSONResponse:
        logger.error("Configuration error during request: %s", exc.detail)
        return _error_response(500, "internal_error", "Internal server error")

    @app.exception_handler(TradebookError)
    async def handle_domain_error(_request: Request, exc: TradebookError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.detail)
            return _error_response(exc.status_code, exc.code, "Internal server error")
        return _error_response(exc.status_code, exc.code, exc.detail)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(500, "internal_error", "Internal server error")
