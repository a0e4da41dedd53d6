"""SQLModel implementation of User repository."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from sqlalchemy import update

from ...domain.state import AccountStreak
from ...errors import ConcurrencyConflict, NotFound
from ...models.user import User
from ..database import SessionFactory
from ._errors import storage_errors


class SQLModelUserRepository:
    """SQLModel-based user repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_profile(self, user_id: str) -> User:
        """Retrieve a user by ID."""
        with storage_errors("load user"), self.session_factory() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFound("User not found")
            session.expunge(user)
            return user

    def update_profile(
        self, user_id: str, *, name: Optional[str] = None, avatar: Optional[str] = None
    ) -> User:
        """Update display name and/or avatar; empty values are ignored."""
        with storage_errors("update user"), self.session_factory() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFound("User not found")
            if name:
                user.name = name
            if avatar:
                user.avatar = avatar
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user

    def get_streak(self, user_id: str) -> AccountStreak:
        with storage_errors("load account streak"), self.session_factory() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFound("User not found")
            return AccountStreak(
                user_id=user.id,
                current_streak=user.current_streak,
                longest_streak=user.longest_streak,
                last_active_date=user.last_active_date,
                version=user.version,
            )

    def save_streak(self, account: AccountStreak, *, expected_version: int) -> AccountStreak:
        """Write all streak fields at once, guarded by the user's version."""
        with storage_errors("save account streak"), self.session_factory() as session:
            result = session.exec(  # type: ignore[call-overload]
                update(User)
                .where(User.id == account.user_id, User.version == expected_version)
                .values(
                    current_streak=account.current_streak,
                    longest_streak=account.longest_streak,
                    last_active_date=account.last_active_date,
                    version=expected_version + 1,
                )
            )
            if result.rowcount != 1:
                raise ConcurrencyConflict(
                    f"Account {account.user_id} changed since version {expected_version}"
                )
        return replace(account, version=expected_version + 1)
