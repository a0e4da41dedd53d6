"""User model holding credentials, profile and the account streak."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional
from uuid import uuid4

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


def new_id() -> str:
    return uuid4().hex


class User(SQLModel, table=True):
    """Application user; also the owner of the aggregate streak."""

    __tablename__: ClassVar[str] = "user"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(nullable=False, max_length=120)
    email: str = Field(nullable=False, unique=True, index=True, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    avatar: str = Field(default="", max_length=512)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    last_login: Optional[datetime] = Field(default=None)

    current_streak: int = Field(default=0, nullable=False)
    longest_streak: int = Field(default=0, nullable=False)
    last_active_date: Optional[date] = Field(default=None)
    version: int = Field(default=1, nullable=False)

    habits: list["Habit"] = Relationship(
        back_populates="user",
        sa_relationship=relationship("Habit", back_populates="user"),
    )
