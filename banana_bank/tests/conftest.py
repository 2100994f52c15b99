"""
Shared pytest fixtures for the Banana Bank test suite.

Uses FastAPI TestClient with an isolated temporary database so tests
never touch the development database.
"""

import os

# Cheap bcrypt work factor for tests; must be set before banana_bank imports
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import tempfile
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from banana_bank.database import create_tables, get_db
from banana_bank.main import app
from banana_bank.models.account import Account
from banana_bank.models.user import User
from banana_bank.repositories.user import SqlAlchemyUserStore
from banana_bank.services.user import create_user

VALID_ATTRS = {
    "name": "John Doe",
    "email": "john@example.com",
    "password": "password123",
    "address": "123 Main St",
    "balance": "100.00000",
}


@pytest.fixture(scope="session")
def test_engine():
    """Create a temporary SQLite database for the entire test session."""
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    engine = create_engine(
        f"sqlite:///{tmp.name}",
        connect_args={"check_same_thread": False},
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()
    os.unlink(tmp.name)


@pytest.fixture(scope="session")
def session_factory(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture(autouse=True)
def clean_tables(session_factory):
    """Start every test from empty tables."""
    yield
    db = session_factory()
    try:
        db.query(Account).delete()
        db.query(User).delete()
        db.commit()
    finally:
        db.close()


@pytest.fixture()
def db(session_factory):
    """Direct SQLAlchemy session for tests that need DB access."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def store(db):
    return SqlAlchemyUserStore(db)


@pytest.fixture()
def client(session_factory):
    """TestClient wired to the temporary database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def user(store):
    """A persisted user built from VALID_ATTRS."""
    return create_user(VALID_ATTRS, store).value


@pytest.fixture()
def fetch_user(session_factory):
    """Read a user straight from the database in a fresh session."""

    def _fetch(user_id):
        session = session_factory()
        try:
            return session.get(User, user_id)
        finally:
            session.close()

    return _fetch
