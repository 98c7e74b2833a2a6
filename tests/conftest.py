"""
tests/conftest.py -- Shared test fixtures for Inkpost.

This module provides:
  - engine / user_store / blog_store: a fresh private in-memory DB per test,
    for unit tests of the stores and services
  - api_client: TestClient wired to a module-scoped shared-memory DB
  - make_user(): create a user directly in a store and mint its token
  - an autouse fixture that resets the rate limiter between tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
for the TestClient because sync route handlers run in a thread pool. Plain
:memory: DBs are per-connection and would present a blank schema to each
worker thread. The named URI format (file:name?mode=memory&cache=shared&uri=true)
shares one in-memory instance across all connections in the same process.

DEBUG must be set before any auth/core import so get_settings()
auto-generates JWT_SECRET in dev mode rather than raising ValueError.
BCRYPT_ROUNDS=4 keeps password hashing fast. ALLOWED_HOSTS must include
"testserver", the Host header TestClient sends.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

# CRITICAL: Set env before any auth/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.limiter import limiter
from api.main import app
from auth.models import User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password
from blog.store import BlogStore
from core.db import create_db_engine

DEFAULT_PASSWORD = "secret123"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@example.com"


def make_user(
    store: UserStore,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
    first_name: str = "Test",
    last_name: str = "User",
) -> tuple[str, str]:
    """Insert a user straight into the store and return (user_id, token)."""
    user_id = store.create_user(
        User(
            email=email or unique_email(),
            hashed_password=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
    )
    return user_id, create_access_token(user_id)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@dataclass
class ApiContext:
    client: TestClient
    user_store: UserStore
    blog_store: BlogStore


def _patch_lifespan(engine: Engine, user_store: UserStore, blog_store: BlogStore):
    """Return an async context manager that replaces the real lifespan.

    Wires pre-created test stores into app.state so TestClient routes see
    an isolated test DB rather than the configured database.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.engine = engine
        app.state.user_store = user_store
        app.state.blog_store = blog_store
        yield

    return test_lifespan


# ---------------------------------------------------------------------------
# Function-scoped stores for unit tests
# ---------------------------------------------------------------------------


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    eng = create_db_engine("sqlite:///:memory:")
    yield eng
    eng.dispose()


@pytest.fixture
def user_store(engine: Engine) -> UserStore:
    return UserStore(engine)


@pytest.fixture
def blog_store(engine: Engine, user_store: UserStore) -> BlogStore:
    return BlogStore(engine)


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    limiter.reset()


# ---------------------------------------------------------------------------
# Module-scoped API client -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client(request) -> Generator[ApiContext, None, None]:
    """Yield an ApiContext for API integration tests.

    The TestClient uses the real FastAPI app with a patched lifespan so tests
    hit real route handlers and middleware but an isolated in-memory DB.
    """
    db_name = f"test_{request.module.__name__.rsplit('.', 1)[-1]}"
    eng = create_db_engine(f"sqlite:///file:{db_name}?mode=memory&cache=shared&uri=true")
    users = UserStore(eng)
    blogs = BlogStore(eng)

    app.router.lifespan_context = _patch_lifespan(eng, users, blogs)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield ApiContext(client=client, user_store=users, blog_store=blogs)

    eng.dispose()
