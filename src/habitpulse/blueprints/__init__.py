"""Blueprint exports."""

from . import auth, habits, user

__all__ = [
    "auth",
    "habits",
    "user",
]
