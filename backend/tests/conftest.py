import os
from datetime import date, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from booking_api import redis_client as redis_module
from booking_api.config import settings
from booking_api.database import enable_sqlite_fk, get_db
from booking_api.main import app
from booking_api.models import Base
from booking_api.models.tables import Availability, Services
from booking_api.services.auth import issue_admin_token
from booking_api.services.slots import get_booking_config

ADMIN_PASSWORD = "test-admin-password"
SESSION_SECRET = "test-session-secret"


class FakeRedis:
    """List-backed stand-in for the few redis commands the app uses."""

    def __init__(self):
        self.lists: dict[str, list[str]] = {}

    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def ping(self):
        return True


def sunday_weekday(d: date) -> int:
    return (d.weekday() + 1) % 7


def upcoming(weekday: int) -> date:
    """Next date (tomorrow or later) whose 0=Sunday weekday matches."""
    d = date.today() + timedelta(days=1)
    while sunday_weekday(d) != weekday:
        d += timedelta(days=1)
    return d


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "session_secret", SESSION_SECRET)
    get_booking_config.cache_clear()
    yield
    get_booking_config.cache_clear()


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(redis_module, "redis_client", fake)
    return fake


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_fk)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory, fake_redis):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {issue_admin_token(SESSION_SECRET)}"}


@pytest.fixture
def week(db):
    """Open every day 09:00-17:00."""
    for day in range(7):
        db.add(Availability(day_of_week=day, start_time="09:00:00", end_time="17:00:00", is_available=True))
    db.commit()


@pytest.fixture
def hour_service(db):
    service = Services(name="Consultation", description="One hour", duration=60, price=5000)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def day_service(db):
    service = Services(name="Full day", description="Eight hours", duration=480, price=40000)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service
