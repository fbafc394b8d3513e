"""Shared fixtures: in-memory database, record factory and fake CSV source."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings
from app.database import create_session_factory, init_db
from app.main import create_app
from app.schemas.records import DepartmentDailyRecord
from app.services.record_store import RecordStore

DAY_1 = date(2020, 5, 13)
DAY_2 = date(2020, 5, 14)
DAY_3 = date(2020, 5, 15)


class FakeSource:
    """Stands in for DataGouvSource, returning canned records or raising."""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.calls = 0

    def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""
    def _make(department="01", day=DAY_1, age_category=9, tests_total=100,
              tests_positive=10, population=1000):
        return DepartmentDailyRecord(
            department=department,
            day=day,
            age_category=age_category,
            tests_total=tests_total,
            tests_positive=tests_positive,
            population=population,
        )
    return _make


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Database session."""
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def store(db):
    """Record store with a small batch size so batching is exercised."""
    return RecordStore(db, batch_size=2)


@pytest.fixture
def fake_source():
    """Source returning no records until a test fills it."""
    return FakeSource()


@pytest.fixture
def client(engine, fake_source):
    """Test client on an app wired to the in-memory database."""
    settings = Settings(API_PREFIX="/api", DATAGOUV_URL="")
    app = create_app(settings, engine=engine, source=fake_source)
    return TestClient(app)
