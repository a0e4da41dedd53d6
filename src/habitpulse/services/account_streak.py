"""Account-level streak: consecutive days on which every habit was complete."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable

from ..domain.state import AccountStreak, HabitState
from ..utils.dates import as_day, same_day


def all_habits_completed(habits: Iterable[HabitState]) -> bool:
    """True when every habit is at or above target; False for an empty set."""

    habits = list(habits)
    return bool(habits) and all(habit.progress >= habit.target for habit in habits)


def recompute_account_streak(
    habits: Iterable[HabitState], account: AccountStreak, today: date
) -> AccountStreak:
    """Return the account streak after re-evaluating the full habit set.

    A user without habits is left untouched. Any incomplete habit resets the
    current streak, even one with partial progress; an individual habit only
    resets on an explicit zero (see ``services.habits.next_streak``).
    """

    habits = list(habits)
    if not habits:
        return account

    today = as_day(today)
    completed = all_habits_completed(habits)
    active_today = same_day(account.last_active_date, today)

    current = account.current_streak
    longest = account.longest_streak
    if completed and not active_today:
        current += 1
        longest = max(longest, current)
    elif not completed:
        current = 0

    return replace(
        account,
        current_streak=current,
        longest_streak=longest,
        last_active_date=today,
    )


__all__ = ["all_habits_completed", "recompute_account_streak"]
