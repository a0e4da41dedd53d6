"""Immutable snapshots the streak engines operate on.

Repositories translate SQLModel rows into these and back; the engines never
touch a session.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Progress value logged for one calendar day."""

    day: date
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.day.isoformat(), "value": self.value}


@dataclass(frozen=True, slots=True)
class HabitState:
    """Snapshot of one habit as read from storage."""

    id: str
    user_id: str
    name: str
    target: float
    progress: float = 0
    streak: int = 0
    last_updated: Optional[date] = None
    history: tuple[HistoryEntry, ...] = ()
    icon: str = ""
    unit: str = ""
    frequency: str = "daily"
    color: str = ""
    version: int = 1

    @property
    def is_completed(self) -> bool:
        return self.progress >= self.target

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""

        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "icon": self.icon,
            "target": self.target,
            "unit": self.unit,
            "frequency": self.frequency,
            "color": self.color,
            "progress": self.progress,
            "streak": self.streak,
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
            "completed": self.is_completed,
            "history": [entry.to_dict() for entry in self.history],
        }


@dataclass(frozen=True, slots=True)
class AccountStreak:
    """Aggregate streak state held on the user record."""

    user_id: str
    current_streak: int = 0
    longest_streak: int = 0
    last_active_date: Optional[date] = None
    version: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "lastActiveDate": (
                self.last_active_date.isoformat() if self.last_active_date else None
            ),
        }


@dataclass(frozen=True, slots=True)
class HabitDraft:
    """Descriptive fields for a habit about to be created."""

    name: str
    target: float
    icon: str = ""
    unit: str = ""
    frequency: str = "daily"
    color: str = ""


__all__ = ["AccountStreak", "HabitDraft", "HabitState", "HistoryEntry"]
