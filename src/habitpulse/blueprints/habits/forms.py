"""Habit form definitions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...domain.state import HabitDraft
from ...services.habits import validate_progress, validate_target


class HabitFrequency(str, Enum):
    """Supported frequency options for habits."""

    DAILY = "daily"
    WEEKLY = "weekly"


class HabitForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=80, description="Short label for the habit")
    icon: str = Field(default="", max_length=16)
    target: float = Field(description="Daily goal in ``unit``")
    unit: str = Field(default="", max_length=32)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY)
    color: str = Field(default="", max_length=16, pattern=r"^(#[0-9A-Fa-f]{3,8})?$")

    @field_validator("target", mode="before")
    @classmethod
    def check_target(cls, value: object) -> float:
        return validate_target(value)

    def to_draft(self) -> HabitDraft:
        return HabitDraft(
            name=self.name,
            icon=self.icon,
            target=self.target,
            unit=self.unit,
            frequency=self.frequency.value,
            color=self.color,
        )


class ProgressForm(BaseModel):
    """Payload for a progress update; the value is today's cumulative total."""

    progress: float

    @field_validator("progress", mode="before")
    @classmethod
    def check_progress(cls, value: object) -> float:
        return validate_progress(value)


__all__ = ["HabitForm", "HabitFrequency", "ProgressForm"]
