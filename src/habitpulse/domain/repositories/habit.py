"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from ..state import HabitDraft, HabitState


class HabitRepository(Protocol):
    """Repository for habit snapshots scoped to an owner."""

    def get(self, habit_id: str, *, user_id: str) -> HabitState:
        """Return the habit; NotFound if missing, Unauthorized if owned by someone else."""
        ...

    def list_for_user(self, *, user_id: str) -> list[HabitState]:
        """List every habit the user owns."""
        ...

    def create(self, draft: HabitDraft, *, user_id: str, today: date) -> HabitState:
        """Create a habit seeded with today's zero history entry."""
        ...

    def save(self, habit: HabitState, *, expected_version: int) -> HabitState:
        """Persist progress fields and today's history entry (compare-and-swap)."""
        ...

    def delete(self, habit_id: str, *, user_id: str) -> None:
        """Delete a habit and its history."""
        ...
