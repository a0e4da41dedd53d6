"""Domain state and repository contracts."""

from .state import AccountStreak, HabitDraft, HabitState, HistoryEntry

__all__ = ["AccountStreak", "HabitDraft", "HabitState", "HistoryEntry"]
