"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from .user import new_id

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Habit(SQLModel, table=True):
    """A user-defined habit with a numeric daily target."""

    __tablename__: ClassVar[str] = "habit"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    name: str = Field(nullable=False, max_length=80)
    icon: str = Field(default="", max_length=16)
    target: float = Field(nullable=False)
    unit: str = Field(default="", max_length=32)
    frequency: str = Field(default="daily", max_length=32)
    color: str = Field(default="", max_length=16)
    progress: float = Field(default=0, nullable=False)
    streak: int = Field(default=0, nullable=False)
    last_updated: Optional[date] = Field(default=None)
    version: int = Field(default=1, nullable=False)

    entries: list["HabitEntry"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitEntry",
            back_populates="habit",
            cascade="all, delete-orphan",
            order_by="HabitEntry.occurred_on",
        ),
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="habits"))


class HabitEntry(SQLModel, table=True):
    """Progress value for a habit on one calendar day."""

    __tablename__: ClassVar[str] = "habit_entry"

    habit_id: str = Field(foreign_key="habit.id", primary_key=True, max_length=32)
    occurred_on: date = Field(primary_key=True, index=True)
    value: float = Field(default=0, nullable=False)

    habit: "Habit" = Relationship(
        back_populates="entries",
        sa_relationship=relationship("Habit", back_populates="entries"),
    )
