"""
Pytest fixtures for dtlearn tests.

Uses an in-memory SQLite DB for speed and isolation.
StaticPool keeps a single connection so the :memory: database (and tables) persist.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from dtlearn.database import Base, get_db
from dtlearn.main import app
from dtlearn.models.learning import Example, Variable
from dtlearn.services.ingestion_service import ingest_csv

TEST_DB = "sqlite:///:memory:"
FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh in-memory DB and tables per test."""
    test_engine = create_engine(
        TEST_DB,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # single connection so :memory: DB and tables persist
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_engine):
    """FastAPI TestClient with test DB."""
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def restaurant_csv() -> str:
    return (FIXTURES / "restaurant.csv").read_text(encoding="utf-8")


@pytest.fixture
def restaurant():
    """The AIMA restaurant problem (12 examples, 10 attributes)."""
    return ingest_csv(str(FIXTURES / "restaurant.csv"))


@pytest.fixture
def weather():
    return Variable(name="Weather", domain=("Sunny", "Rainy"))


@pytest.fixture
def weather_examples():
    return [
        Example(values={"Weather": "Sunny"}, output="Yes"),
        Example(values={"Weather": "Rainy"}, output="No"),
        Example(values={"Weather": "Sunny"}, output="Yes"),
    ]
