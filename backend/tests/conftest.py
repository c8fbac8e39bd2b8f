# backend/tests/conftest.py
"""
Pytest configuration for the booking API.

Every test gets its own in-memory SQLite database; the application's
``get_db`` dependency is overridden to hand that session to the routes.
"""

import os
import sys

# CRITICAL: Set testing mode BEFORE any app imports!
os.environ["IS_TESTING"] = "true"

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, backend_dir)

from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from app.api.dependencies.database import get_db
from app.database import Base, build_engine
from app.main import fastapi_app as app  # Use FastAPI instance for tests

# Register models on Base.metadata for create_all
from app import models  # noqa: F401

from tests.factories.booking_factories import (
    auth_headers_for,
    create_booking,
    create_eligible_user,
    create_hotel,
    create_room,
)

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    engine = build_engine(TEST_DATABASE_URL)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine) -> Session:
    """Create a new database session for each test."""
    TestingSessionLocal = sessionmaker(
        bind=db_engine, autocommit=False, autoflush=False, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db: Session):
    """Create a test client with the test database."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # Don't use context manager - create directly
    test_client = TestClient(app)

    yield test_client

    # Cleanup
    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def test_hotel(db: Session):
    return create_hotel(db, name="Driven Resort")


@pytest.fixture
def test_room(db: Session, test_hotel):
    return create_room(db, test_hotel, name="101", capacity=3)


@pytest.fixture
def eligible_user(db: Session):
    """User with an enrollment and a PAID in-person ticket that includes a hotel."""
    user, _ = create_eligible_user(db)
    return user


@pytest.fixture
def auth_headers(db: Session, eligible_user) -> Dict[str, str]:
    return auth_headers_for(db, eligible_user)


@pytest.fixture
def existing_booking(db: Session, eligible_user, test_room):
    return create_booking(db, eligible_user, test_room)
