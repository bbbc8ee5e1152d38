"""
Shared pytest fixtures for the expense ledger test suite.

Points DATABASE_URL at a temporary SQLite file *before* the backend is
imported, so the app's engine and lifespan use an isolated database and
tests never touch a real one.
"""

import os
import tempfile

_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
os.environ["DATABASE_URL"] = f"sqlite:///{_tmp.name}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from backend.database import SessionLocal, engine
from backend.main import app
from backend.services.user import register_user
from backend.tests.helpers import DEFAULT_PASSWORD, unique_username


@pytest.fixture(scope="session")
def client():
    """TestClient with the lifespan running, so the database is ready."""
    with TestClient(app) as test_client:
        yield test_client
    engine.dispose()
    os.unlink(_tmp.name)


@pytest.fixture
def db(client):
    """Direct SQLAlchemy session on the same test database."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_owner(db):
    """Create a user straight through the service layer and return it."""
    def _make(prefix: str = "owner"):
        return register_user(unique_username(prefix), DEFAULT_PASSWORD, db)
    return _make


@pytest.fixture
def auth_headers(client):
    """Register and log in a fresh user over HTTP; returns request headers."""
    def _login(username: str = None, password: str = DEFAULT_PASSWORD):
        username = username or unique_username()
        r = client.post("/register", json={"username": username, "password": password})
        assert r.status_code == 200, f"register failed: {r.status_code} {r.text}"
        r = client.post("/login", json={"username": username, "password": password})
        assert r.status_code == 200, f"login failed: {r.status_code} {r.text}"
        return {"Authorization": f"Bearer {r.json()['token']}"}
    return _login
