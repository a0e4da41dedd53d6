"""Service module exports."""

from . import (
    account_streak,
    auth,
    clock,
    habits,
    insights,
    onboarding,
    tracking,
)

__all__ = [
    "account_streak",
    "auth",
    "clock",
    "habits",
    "insights",
    "onboarding",
    "tracking",
]
