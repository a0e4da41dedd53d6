"""SQLModel table exports."""

from .habit import Habit, HabitEntry
from .user import User

__all__ = [
    "Habit",
    "HabitEntry",
    "User",
]
