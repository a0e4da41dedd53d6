"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from sqlalchemy import update
from sqlmodel import Session, select

from ...domain.state import HabitDraft, HabitState, HistoryEntry
from ...errors import ConcurrencyConflict, NotFound, Unauthorized
from ...models.habit import Habit, HabitEntry
from ..database import SessionFactory
from ._errors import storage_errors


def _to_state(habit: Habit, entries: list[HabitEntry]) -> HabitState:
    return HabitState(
        id=habit.id,
        user_id=habit.user_id,
        name=habit.name,
        icon=habit.icon,
        target=habit.target,
        unit=habit.unit,
        frequency=habit.frequency,
        color=habit.color,
        progress=habit.progress,
        streak=habit.streak,
        last_updated=habit.last_updated,
        history=tuple(HistoryEntry(day=e.occurred_on, value=e.value) for e in entries),
        version=habit.version,
    )


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _entries(self, session: Session, habit_ids: list[str]) -> dict[str, list[HabitEntry]]:
        by_habit: dict[str, list[HabitEntry]] = {habit_id: [] for habit_id in habit_ids}
        if not habit_ids:
            return by_habit
        statement = (
            select(HabitEntry)
            .where(HabitEntry.habit_id.in_(habit_ids))  # type: ignore[attr-defined]
            .order_by(HabitEntry.occurred_on)  # type: ignore[arg-type]
        )
        for entry in session.exec(statement).all():
            by_habit.setdefault(entry.habit_id, []).append(entry)
        return by_habit

    def _owned(self, session: Session, habit_id: str, user_id: str) -> Habit:
        habit: Optional[Habit] = session.get(Habit, habit_id)
        if habit is None:
            raise NotFound("Habit not found")
        if habit.user_id != user_id:
            raise Unauthorized("Habit belongs to another user")
        return habit

    def get(self, habit_id: str, *, user_id: str) -> HabitState:
        """Retrieve a habit snapshot including its history."""
        with storage_errors("load habit"), self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            return _to_state(habit, self._entries(session, [habit.id])[habit.id])

    def list_for_user(self, *, user_id: str) -> list[HabitState]:
        """List the user's habits ordered by name."""
        with storage_errors("list habits"), self.session_factory() as session:
            statement = (
                select(Habit).where(Habit.user_id == user_id).order_by(Habit.name)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            entries = self._entries(session, [row.id for row in rows])
            return [_to_state(row, entries[row.id]) for row in rows]

    def create(self, draft: HabitDraft, *, user_id: str, today: date) -> HabitState:
        """Create a habit with progress 0, streak 0 and a zero entry for today."""
        with storage_errors("create habit"), self.session_factory() as session:
            habit = Habit(
                user_id=user_id,
                name=draft.name,
                icon=draft.icon,
                target=draft.target,
                unit=draft.unit,
                frequency=draft.frequency,
                color=draft.color,
                progress=0,
                streak=0,
                last_updated=today,
            )
            session.add(habit)
            entry = HabitEntry(habit_id=habit.id, occurred_on=today, value=0)
            session.add(entry)
            session.flush()
            return _to_state(habit, [entry])

    def save(self, habit: HabitState, *, expected_version: int) -> HabitState:
        """Write progress fields and today's history entry in one transaction.

        The row is only updated while its version still equals
        ``expected_version``; otherwise ``ConcurrencyConflict`` is raised and
        nothing is written.
        """
        if not habit.history or habit.history[-1].day != habit.last_updated:
            raise ValueError("Habit history must end on last_updated")
        latest = habit.history[-1]

        with storage_errors("save habit"), self.session_factory() as session:
            result = session.exec(  # type: ignore[call-overload]
                update(Habit)
                .where(Habit.id == habit.id, Habit.version == expected_version)
                .values(
                    progress=habit.progress,
                    streak=habit.streak,
                    last_updated=habit.last_updated,
                    version=expected_version + 1,
                )
            )
            if result.rowcount != 1:
                raise ConcurrencyConflict(f"Habit {habit.id} changed since version {expected_version}")

            existing = session.get(HabitEntry, (habit.id, latest.day))
            if existing is not None:
                existing.value = latest.value
                session.add(existing)
            else:
                session.add(HabitEntry(habit_id=habit.id, occurred_on=latest.day, value=latest.value))

        return replace(habit, version=expected_version + 1)

    def delete(self, habit_id: str, *, user_id: str) -> None:
        """Delete a habit and its history entries."""
        with storage_errors("delete habit"), self.session_factory() as session:
            habit = self._owned(session, habit_id, user_id)
            session.delete(habit)
