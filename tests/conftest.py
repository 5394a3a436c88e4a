# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets environment defaults before todo_api.config is imported, then provides
# fresh stores, a token service with a controllable clock, and a TestClient
# over an app built around them.
# =============================================================================

import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient

from todo_api.database import Database
from todo_api.main import create_app
from todo_api.security import TokenService
from todo_api.stores import CredentialStore, TaskStore

from .fakes import FakeClock

TEST_SECRET = "test-secret"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tokens(clock):
    return TokenService(TEST_SECRET, expire_minutes=8 * 60, clock=clock)


@pytest.fixture
def users():
    # Minimum bcrypt cost keeps the suite fast.
    return CredentialStore(bcrypt_rounds=4)


@pytest.fixture
def task_store():
    return TaskStore()


@pytest.fixture
def db(users, task_store):
    return Database(users=users, tasks=task_store)


@pytest.fixture
def client(db, tokens):
    app = create_app(db=db, tokens=tokens)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user over HTTP and return (token, user) from the response."""

    def _register(username: str, password: str):
        response = client.post("/auth/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        data = response.json()
        return data["token"], data["user"]

    return _register
