"""Builders shared by several test modules."""

from __future__ import annotations

from datetime import date

from habitpulse.domain.state import AccountStreak, HabitState, HistoryEntry

PASSWORD = "correct-horse-battery"
START_DAY = date(2024, 1, 2)


def make_habit(
    *,
    target: float = 8,
    progress: float = 0,
    streak: int = 0,
    last_updated: date | None = None,
    history: list[tuple[date, float]] | None = None,
    habit_id: str = "habit-1",
) -> HabitState:
    """Build an in-memory habit snapshot for the pure engine tests."""

    if history is None:
        history = [(last_updated, progress)] if last_updated else []
    return HabitState(
        id=habit_id,
        user_id="user-1",
        name="Drink Water",
        target=target,
        progress=progress,
        streak=streak,
        last_updated=last_updated,
        history=tuple(HistoryEntry(day=day, value=value) for day, value in history),
        unit="glasses",
    )


def make_account(
    *, current: int = 0, longest: int = 0, last_active: date | None = None
) -> AccountStreak:
    return AccountStreak(
        user_id="user-1",
        current_streak=current,
        longest_streak=longest,
        last_active_date=last_active,
    )


def register_and_login(client, *, email: str = "sam@example.com", goals=None) -> dict:
    """Register a user through the API and sign the client in."""

    response = client.post(
        "/auth/register",
        json={"name": "Sam", "email": email, "password": PASSWORD, "goals": goals or []},
    )
    assert response.status_code == 201, response.get_json()
    response = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.get_json()
    return response.get_json()["user"]
