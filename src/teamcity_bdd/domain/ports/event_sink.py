"""Event sink protocol: contract between host adapters and the reporter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from teamcity_bdd.domain.events import Event


class EventSink(Protocol):
    """Receiver of lifecycle events.

    Host adapters depend on this Protocol, not on TeamCityReporter.

    Lifecycle:
    1. handle() - once per event, serially
    2. close() - exactly once, on every exit path

    Example:
        sink = TeamCityReporter(sys.stdout)
        try:
            for event in events:
                sink.handle(event)
        finally:
            sink.close()
    """

    def handle(self, event: Event) -> None:
        """Process one lifecycle event to completion."""
        ...

    def close(self) -> None:
        """Finish open entities and end the run.

        Raises:
            NoScenarioSucceededError: No scenario succeeded in the run.
        """
        ...


class OutputSink(Protocol):
    """Line-oriented text output (sys.stdout, StringIO, behave stream)."""

    def write(self, text: str, /) -> object:
        """Write text."""
        ...

    def flush(self) -> None:
        """Flush buffered text."""
        ...
