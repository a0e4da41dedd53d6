"""Read-only habit views for dashboards and detail pages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

from ..domain.state import AccountStreak, HabitState
from ..utils.dates import iso_week_number, trailing_days


@dataclass(slots=True)
class CompletionSummary:
    """Lightweight DTO for the completed/remaining split."""

    completed: int
    remaining: int

    @property
    def total(self) -> int:
        return self.completed + self.remaining

    def to_dict(self) -> dict[str, int]:
        return {"completed": self.completed, "remaining": self.remaining, "total": self.total}


def history_window(habit: HabitState, today: date, days: int = 30) -> list[dict[str, Any]]:
    """One row per day of the trailing window; missing days stay ``None``."""

    values = {entry.day: entry.value for entry in habit.history}
    rows: list[dict[str, Any]] = []
    for day in trailing_days(today, days):
        value = values.get(day)
        rows.append(
            {
                "date": day.isoformat(),
                "label": day.strftime("%b %d").replace(" 0", " "),
                "weekday": day.strftime("%a"),
                "value": value,
                "completed": value is not None and value >= habit.target,
            }
        )
    return rows


def success_rate(habit: HabitState) -> int:
    """Percentage of logged days that met the target."""

    if not habit.history:
        return 0
    hits = sum(1 for entry in habit.history if entry.value >= habit.target)
    return round(hits / len(habit.history) * 100)


def completion_summary(habits: Iterable[HabitState]) -> CompletionSummary:
    completed = remaining = 0
    for habit in habits:
        if habit.is_completed:
            completed += 1
        else:
            remaining += 1
    return CompletionSummary(completed=completed, remaining=remaining)


def dashboard_payload(
    habits: Iterable[HabitState], account: AccountStreak, today: date
) -> dict[str, Any]:
    """Compose the dashboard summary served by ``/api/dashboard``."""

    habits = list(habits)
    return {
        "date": today.isoformat(),
        "week": iso_week_number(today),
        "summary": completion_summary(habits).to_dict(),
        "streak": account.to_dict(),
        "habits": [
            {
                "id": habit.id,
                "name": habit.name,
                "icon": habit.icon,
                "color": habit.color,
                "progress": habit.progress,
                "target": habit.target,
                "unit": habit.unit,
                "completion": round(habit.progress / habit.target * 100),
                "streak": habit.streak,
            }
            for habit in habits
        ],
    }


__all__ = [
    "CompletionSummary",
    "completion_summary",
    "dashboard_payload",
    "history_window",
    "success_rate",
]
