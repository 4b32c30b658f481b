"""Clocks and timestamp formatting for service messages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


class SystemClock:
    """Wall clock in local time."""

    __slots__ = ()

    def now(self) -> datetime:
        """Return current local time."""
        return datetime.now()


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock that always returns the same instant. For tests and replays."""

    instant: datetime

    def now(self) -> datetime:
        """Return the fixed instant."""
        return self.instant


def format_timestamp(moment: datetime) -> str:
    """Format as YYYY-MM-DDTHH:MM:SS.mmm (millisecond precision)."""
    return f"{moment:%Y-%m-%dT%H:%M:%S}.{moment.microsecond // 1000:03d}"


def format_time_short(moment: datetime) -> str:
    """Format as HH:MM:SS.mmm, used in step lines."""
    return f"{moment:%H:%M:%S}.{moment.microsecond // 1000:03d}"
