"""Profile form definitions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProfileForm(BaseModel):
    """Partial profile update; omitted or empty fields are left alone."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, max_length=120)
    avatar: Optional[str] = Field(default=None, max_length=512)

    @model_validator(mode="after")
    def require_a_field(self) -> "ProfileForm":
        if not self.name and not self.avatar:
            raise ValueError("Provide a name or an avatar to update.")
        return self


__all__ = ["ProfileForm"]
