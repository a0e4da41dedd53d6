"""User repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user import User
from ..state import AccountStreak


class UserRepository(Protocol):
    """Repository for user profiles and the account streak."""

    def get_profile(self, user_id: str) -> User:
        """Return the user row; NotFound if missing."""
        ...

    def update_profile(
        self, user_id: str, *, name: Optional[str] = None, avatar: Optional[str] = None
    ) -> User:
        """Update display fields."""
        ...

    def get_streak(self, user_id: str) -> AccountStreak:
        """Read the aggregate streak state."""
        ...

    def save_streak(self, account: AccountStreak, *, expected_version: int) -> AccountStreak:
        """Persist the aggregate streak state (compare-and-swap)."""
        ...
