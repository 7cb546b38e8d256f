from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Configure before the application settings are imported.
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"

from stockkeeper.api.deps import get_db  # noqa: E402
from stockkeeper.db.base import Base  # noqa: E402
from stockkeeper.db.session import enable_sqlite_foreign_keys  # noqa: E402
from stockkeeper.main import app  # noqa: E402
from stockkeeper import models  # noqa: E402,F401


@pytest.fixture()
def engine():
    # One shared in-memory connection so the request threads see the same data
    engine = enable_sqlite_foreign_keys(
        create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def register_user(client):
    """Register an account over HTTP and return the response body."""

    def _register(username: str, email: str | None = None, password: str = "secret1") -> dict:
        resp = client.post(
            "/api/register",
            json={"username": username, "email": email or f"{username}@x.com", "password": password},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _register


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def bearer():
    return auth_header
