from __future__ import annotations

import random
from contextlib import contextmanager

import pytest
from sqlalchemy.exc import OperationalError

from habitpulse.errors import InvalidInput, PersistenceError
from habitpulse.services import auth
from habitpulse.services.onboarding import GOAL_HABITS, drafts_for_goals, seed_goal_habits
from helpers import PASSWORD, START_DAY


def _register(session_factory, email="ada@example.com", password=PASSWORD, name="Ada"):
    return auth.create_user(
        name=name, email=email, password=password, session_factory=session_factory
    )


def test_create_user_hashes_password_and_zeroes_streaks(session_factory):
    user = _register(session_factory, email="  Ada@Example.com ")

    assert user.email == "ada@example.com"
    assert user.password_hash != PASSWORD
    assert user.password_hash.startswith("$argon2")
    assert (user.current_streak, user.longest_streak, user.last_active_date) == (0, 0, None)
    assert user.avatar.startswith("https://randomuser.me/api/portraits/")


def test_duplicate_email_is_case_insensitive(session_factory):
    _register(session_factory)

    with pytest.raises(InvalidInput, match="Email already in use"):
        _register(session_factory, email="ADA@example.com")


@pytest.mark.parametrize(
    "kwargs",
    [{"name": "   "}, {"password": "short"}],
)
def test_create_user_rejects_bad_fields(session_factory, kwargs):
    with pytest.raises(InvalidInput):
        _register(session_factory, **kwargs)


def test_registration_racing_past_lookup_is_rejected_as_duplicate(session_factory, monkeypatch):
    first = _register(session_factory)
    # Both requests saw no existing row; the unique index decides.
    monkeypatch.setattr(auth, "_find_by_email", lambda session, email: None)

    with pytest.raises(InvalidInput, match="Email already in use"):
        _register(session_factory, name="Ada Again")

    monkeypatch.undo()
    assert auth.get_user_by_email("ada@example.com", session_factory).id == first.id


@contextmanager
def _locked_database():
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))
    yield  # pragma: no cover


@pytest.mark.parametrize(
    "call",
    [
        lambda factory: auth.get_user_by_email("ada@example.com", factory),
        lambda factory: auth.authenticate(email="ada@example.com", password=PASSWORD, session_factory=factory),
        lambda factory: _register(factory),
    ],
    ids=["lookup", "authenticate", "register"],
)
def test_storage_failures_surface_as_persistence_errors(call):
    with pytest.raises(PersistenceError):
        call(_locked_database)


def test_authenticate(session_factory):
    _register(session_factory)

    user = auth.authenticate(email="ADA@example.com", password=PASSWORD, session_factory=session_factory)

    assert user is not None
    assert user.last_login is not None
    assert auth.authenticate(email="ada@example.com", password="wrong-password", session_factory=session_factory) is None
    assert auth.authenticate(email="nobody@example.com", password=PASSWORD, session_factory=session_factory) is None
    assert auth.authenticate(email="", password=PASSWORD, session_factory=session_factory) is None


def test_get_user_by_email(session_factory):
    created = _register(session_factory)

    assert auth.get_user_by_email("Ada@Example.com", session_factory).id == created.id
    assert auth.get_user_by_email("other@example.com", session_factory) is None


def test_default_avatar_is_deterministic_for_a_seeded_rng():
    first = auth.default_avatar(random.Random(7))
    second = auth.default_avatar(random.Random(7))

    assert first == second
    assert first.endswith(".jpg")


def test_drafts_for_goals_skips_unknown_and_duplicates():
    drafts = drafts_for_goals(["Fitness", "fitness", "astrology", " learning "])

    assert [d.name for d in drafts] == [d.name for d in GOAL_HABITS["fitness"] + GOAL_HABITS["learning"]]


def test_seed_goal_habits_creates_fresh_habits(habit_repo, user):
    created = seed_goal_habits(["mindfulness"], user_id=user.id, today=START_DAY, habit_repo=habit_repo)

    assert {h.name for h in created} == {"Meditation", "Gratitude Journal", "Sleep"}
    assert all(h.progress == 0 and h.streak == 0 for h in created)
    assert all(h.last_updated == START_DAY for h in created)
    assert len(habit_repo.list_for_user(user_id=user.id)) == 3
