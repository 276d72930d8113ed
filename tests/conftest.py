"""Pytest configuration and fixtures"""
import os

# Set test environment variables (przed importem app.*)
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-which-is-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.data.database import Base, create_db_engine, create_session_factory
from app.data.models import UserModel
from app.data.seed import seed


@pytest.fixture
def lock_service():
    """Lock per user bez redisa: cart_lock() dziala jako no-op context manager."""
    return MagicMock()


@pytest.fixture
def db():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine)()
    seed(session)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def make_user(db):
    def _make(username: str) -> int:
        user = UserModel(username=username, password_hash="x")
        db.add(user)
        db.commit()
        return user.id

    return _make


@pytest.fixture
def app(lock_service):
    application = create_app(database_url="sqlite://", lock_service=lock_service)
    with application.state.session_factory() as session:
        seed(session)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    """Rejestruje i loguje usera, zwraca naglowki z bearer tokenem."""

    def _login(username: str = "alice", password: str = "pw1") -> dict:
        client.post("/register", json={"username": username, "password": password})
        response = client.post("/login", json={"username": username, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
