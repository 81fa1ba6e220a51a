#!/usr/bin/env python
"""
tradebook/database.py

Sets up the SQLAlchemy database connection, session management, and the
helper that creates tables at startup.

Key Features:
- Loads environment variables from .env at project root
- Handles default SQLite or custom DB URLs
- Provides get_db() for FastAPI dependency injection
- Turns on SQLite foreign keys so user/account deletes cascade to trades

No user or account is seeded; users must sign up via /api/auth/sign-up.
"""

import os
import logging
from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from tradebook.config import DEFAULT_DATABASE_URL

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------
# 1) Environment Setup
# ------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

dotenv_path = os.path.join(PROJECT_ROOT, ".env")
load_dotenv(dotenv_path=dotenv_path)

DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
logger.debug("DATABASE_URL: %s", DATABASE_URL)

# ------------------------------------------------------------------
# 2) SQLAlchemy Engine and Session Setup
# ------------------------------------------------------------------
def build_engine(url: str) -> Engine:
    """
    Create an engine for the given URL. SQLite needs check_same_thread=False
    because FastAPI runs sync routes in a threadpool.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign_keys is switched on."""
    if dbapi_connection.__class__.__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# ------------------------------------------------------------------
# 3) FastAPI Dependency Injection
# ------------------------------------------------------------------
def get_db():
    """
    Provides a DB session for FastAPI routes. Yields a SessionLocal instance
    and closes it after use to prevent leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# ------------------------------------------------------------------
# 4) Table Initialization
# ------------------------------------------------------------------
def create_tables(bind: Engine | None = None):
    """
    Create every table registered on Base.metadata. Idempotent: existing
    tables and rows are left alone.
    """
    # Import models to register with Base.metadata
    from tradebook.models import user, account, trade, investment_profile  # noqa: F401

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables created or verified.")


if __name__ == "__main__":
    create_tables()
