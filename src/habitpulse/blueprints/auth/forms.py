"""Registration and login form definitions."""

from __future__ import annotations

import re
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...services.auth import MIN_PASSWORD_LENGTH, normalize_email

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    value = normalize_email(value)
    if not _EMAIL_RE.match(value):
        raise ValueError("Please provide a valid email address.")
    return value


class RegistrationForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=120)
    email: str = Field(max_length=255)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=256)
    goals: list[str] = Field(default_factory=list, description="Goal keys used to seed habits")

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("goals", mode="before")
    @classmethod
    def split_goals(cls, value: str | Iterable[str] | None) -> list[str] | Iterable[str]:
        """Accept a comma-separated string as well as a list."""

        if value is None:
            return []
        if isinstance(value, str):
            return [goal for goal in (part.strip() for part in value.split(",")) if goal]
        return value


class LoginForm(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


__all__ = ["LoginForm", "RegistrationForm"]
