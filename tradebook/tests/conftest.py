"""
Shared pytest fixtures for the Tradebook test suite.

Uses FastAPI TestClient with an isolated temporary SQLite database per test
so tests never touch a real database and never see each other's rows.
"""

import os

# Must be set before tradebook.main is imported: it builds the app at import
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from tradebook.config import Settings
from tradebook.database import Base, build_engine, get_db
from tradebook.main import create_app
from tradebook.services.auth import SessionService
from tradebook.utils.auth import TokenIssuer
from tradebook.utils.passwords import PasswordHasher

# Import all models so Base.metadata knows about them
import tradebook.models  # noqa: F401

ACCESS_SECRET = "test-access-secret"
REFRESH_SECRET = "test-refresh-secret"
PASSWORD = "secret1"


@pytest.fixture
def settings():
    return Settings(
        jwt_secret=ACCESS_SECRET,
        jwt_refresh_secret=REFRESH_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def test_engine(tmp_path):
    """Create a temporary SQLite database for one test."""
    engine = build_engine(f"sqlite:///{tmp_path / 'tradebook_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def test_db(session_factory):
    """Direct SQLAlchemy session for tests that need DB access."""
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def issuer():
    return TokenIssuer(ACCESS_SECRET, REFRESH_SECRET)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def session_service(test_db, issuer, hasher):
    return SessionService(test_db, issuer, hasher)


@pytest.fixture
def app(settings, session_factory):
    app = create_app(settings)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Anonymous TestClient bound to the isolated test database."""
    return TestClient(app)


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------
def sign_up(client, email, username, name="Test User", password=PASSWORD):
    r = client.post("/api/auth/sign-up", json={
        "email": email,
        "name": name,
        "username": username,
        "password": password,
    })
    assert r.status_code == 201, r.text
    return r.json()


def sign_in(client, email, password=PASSWORD):
    r = client.post("/api/auth/sign-in", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    """Signed-up and signed-in user A: (user json, auth headers)."""
    user = sign_up(client, "alice@example.com", "alice", name="Alice")
    body = sign_in(client, "alice@example.com")
    return user, bearer(body["token"])


@pytest.fixture
def bob(client):
    """A second, unrelated user B."""
    user = sign_up(client, "bob@example.com", "bob", name="Bob")
    body = sign_in(client, "bob@example.com")
    return user, bearer(body["token"])
