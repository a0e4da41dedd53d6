"""Pytest configuration and shared fixtures for HabitPulse tests.

This module provides database fixtures, test data factories, and a Flask
client pinned to a fixed clock, so streak rules can be exercised day by day
without touching the real app database or the wall clock.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitpulse import create_app
from habitpulse.domain.state import HabitDraft, HabitState
from habitpulse.infra.database import create_session_factory
from habitpulse.infra.repositories import SQLModelHabitRepository, SQLModelUserRepository
from habitpulse.models import User
from habitpulse.services.clock import FixedClock
from habitpulse.services.tracking import TrackingService
from helpers import START_DAY, register_and_login



# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the app builds (commit on clean exit)."""

    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def user_repo(session_factory) -> SQLModelUserRepository:
    return SQLModelUserRepository(session_factory)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(START_DAY)


@pytest.fixture
def tracking(habit_repo, user_repo, clock) -> TrackingService:
    return TrackingService(habit_repo=habit_repo, user_repo=user_repo, clock=clock)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user_factory(session_factory):
    """Factory for persisted users with a dummy password hash."""

    counter = {"n": 0}

    def _create_user(name: str = "Tester", email: str | None = None) -> User:
        counter["n"] += 1
        email = email or f"tester{counter['n']}@example.com"
        with session_factory() as session:
            user = User(name=name, email=email, password_hash="dummy-hash")
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
        return user

    return _create_user


@pytest.fixture
def user(user_factory) -> User:
    return user_factory()


@pytest.fixture
def other_user(user_factory) -> User:
    return user_factory(name="Someone Else")


@pytest.fixture
def habit_factory(habit_repo, user, clock):
    """Factory for creating persisted habits through the repository.

    Returns:
        Callable: Function that creates habits seeded for ``clock.today()``
    """

    def _create_habit(
        name: str = "Drink Water",
        target: float = 8,
        unit: str = "glasses",
        owner: User | None = None,
    ) -> HabitState:
        owner = owner or user
        draft = HabitDraft(name=name, target=target, unit=unit, icon="💧", color="#33A1FD")
        return habit_repo.create(draft, user_id=owner.id, today=clock.today())

    return _create_habit


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path, monkeypatch, clock):
    monkeypatch.setenv("HABITPULSE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HABITPULSE_DATABASE_URL", raising=False)
    monkeypatch.setenv("HABITPULSE_SECRET_KEY", "test-secret")
    flask_app = create_app("testing", clock=clock)
    yield flask_app
    flask_app.extensions["habitpulse"].engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth_client(client):
    """Client signed in as a freshly registered user without habits."""

    register_and_login(client)
    return client
