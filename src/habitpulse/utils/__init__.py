"""Shared helpers."""

from .dates import as_day, iso_week_number, same_day, trailing_days

__all__ = ["as_day", "iso_week_number", "same_day", "trailing_days"]
