"""Authentication and user management services."""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..errors import InvalidInput
from ..infra.database import SessionFactory
from ..infra.repositories._errors import storage_errors
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    return email.strip().lower()


def default_avatar(rng: random.Random | None = None) -> str:
    """Return a placeholder portrait URL."""

    rng = rng or random.Random()
    folder = "men" if rng.random() > 0.5 else "women"
    return f"https://randomuser.me/api/portraits/{folder}/{rng.randrange(99)}.jpg"


def _find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(func.lower(User.email) == email)).first()


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by email (case-insensitive)."""
    email = normalize_email(email)
    with storage_errors("load user"), session_factory() as session:
        user = _find_by_email(session, email)
        if user:
            session.expunge(user)
        return user


def create_user(
    *,
    name: str,
    email: str,
    password: str,
    session_factory: SessionFactory,
    avatar: str | None = None,
) -> User:
    """Create a new user with hashed password and zeroed streaks.

    The unique index on ``email`` settles registrations racing past the
    lookup; the loser gets the same ``InvalidInput`` as a plain duplicate.
    """

    email = normalize_email(email)
    name = name.strip()
    if not name:
        raise InvalidInput("Name is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    password_hash = _hasher.hash(password)
    with storage_errors("register user"), session_factory() as session:
        if _find_by_email(session, email):
            raise InvalidInput("Email already in use")
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            avatar=avatar or default_avatar(),
        )
        session.add(user)
        try:
            session.flush()
        except IntegrityError as exc:
            raise InvalidInput("Email already in use") from exc
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    email: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    email = normalize_email(email)
    if not email or not password:
        return None
    with storage_errors("sign in"), session_factory() as session:
        user = _find_by_email(session, email)
        if user is None:
            return None
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            logger.info("Login rejected", extra={"user_id": user.id})
            return None

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
        user.last_login = datetime.now(timezone.utc)
        session.add(user)
    return user


__all__ = [
    "authenticate",
    "create_user",
    "default_avatar",
    "get_user_by_email",
    "normalize_email",
]
