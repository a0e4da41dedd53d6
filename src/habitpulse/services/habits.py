"""Habit progress rules: completion, per-habit streaks and daily history."""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import date
from numbers import Real

from ..domain.state import HabitState, HistoryEntry
from ..errors import InvalidInput
from ..utils.dates import as_day, same_day


def validate_progress(value: object) -> float:
    """Return ``value`` as a float or raise ``InvalidInput``."""

    # bool is an int subclass; a checkbox value is not a progress amount.
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput("Progress must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInput("Progress must be a finite number")
    if number < 0:
        raise InvalidInput("Progress cannot be negative")
    return number


def validate_target(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput("Target must be a number")
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise InvalidInput("Target must be greater than zero")
    return number


def next_streak(habit: HabitState, new_progress: float, today: date) -> int:
    """Decide whether the habit streak increments, resets or holds."""

    was_completed = habit.progress >= habit.target
    is_now_completed = new_progress >= habit.target

    # One increment per day: only the move into "complete today" counts.
    if is_now_completed and (not was_completed or not same_day(habit.last_updated, today)):
        return habit.streak + 1
    # Zeroing progress is an explicit undo; partial progress never resets.
    if new_progress == 0:
        return 0
    return habit.streak


def upsert_history(
    history: tuple[HistoryEntry, ...], today: date, value: float
) -> tuple[HistoryEntry, ...]:
    """Replace today's entry when it is the last one, otherwise append it."""

    if history and history[-1].day == today:
        return history[:-1] + (HistoryEntry(day=today, value=value),)
    return history + (HistoryEntry(day=today, value=value),)


def apply_progress(habit: HabitState, new_progress: object, today: date) -> HabitState:
    """Return ``habit`` with today's progress applied.

    Only ``progress``, ``streak``, ``last_updated`` and ``history`` change.
    Raises ``InvalidInput`` for negative or non-numeric progress and for a
    non-positive target.
    """

    progress = validate_progress(new_progress)
    validate_target(habit.target)
    today = as_day(today)

    return replace(
        habit,
        progress=progress,
        streak=next_streak(habit, progress, today),
        last_updated=today,
        history=upsert_history(habit.history, today, progress),
    )


__all__ = [
    "apply_progress",
    "next_streak",
    "upsert_history",
    "validate_progress",
    "validate_target",
]
