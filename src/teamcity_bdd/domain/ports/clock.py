"""Clock protocol: source of message timestamps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime


class Clock(Protocol):
    """Contract for time sources.

    Reporter never calls datetime.now() directly. Tests inject a fixed clock.
    """

    def now(self) -> datetime:
        """Return current local time."""
        ...
