"""Clock capability injected into request handlers and services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of "today" for the day-granular streak rules."""

    def today(self) -> date:  # pragma: no cover - interface
        ...


class SystemClock:
    """Wall-clock reader, optionally pinned to an IANA timezone."""

    def __init__(self, timezone: Optional[str] = None) -> None:
        self._tz = ZoneInfo(timezone) if timezone else None

    def today(self) -> date:
        return datetime.now(self._tz).date()


@dataclass
class FixedClock:
    """Clock frozen on a given day; ``advance`` moves it forward."""

    current: date

    def today(self) -> date:
        return self.current

    def advance(self, days: int = 1) -> date:
        self.current = date.fromordinal(self.current.toordinal() + days)
        return self.current


__all__ = ["Clock", "FixedClock", "SystemClock"]
