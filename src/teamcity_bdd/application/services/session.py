"""Reporting service: guaranteed shutdown around a run."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from teamcity_bdd.application.reporters.teamcity import TeamCityReporter

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from teamcity_bdd.application.reporters.diagnostics import DiagnosticBuffer
    from teamcity_bdd.domain.events import Event
    from teamcity_bdd.domain.model.configuration import ReporterConfig
    from teamcity_bdd.domain.ports.clock import Clock
    from teamcity_bdd.domain.ports.event_sink import OutputSink


class ReportingService:
    """Orchestrates one reporting run: open → events → close.

    Contracts:
        - close() always called (try/finally), also when the host raises
        - NoScenarioSucceededError propagates after all output is written
    """

    def __init__(
        self,
        output: OutputSink,
        *,
        config: ReporterConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._output = output
        self._config = config
        self._clock = clock

    def _create_reporter(self, diagnostics: DiagnosticBuffer | None) -> TeamCityReporter:
        return TeamCityReporter(
            self._output,
            config=self._config,
            clock=self._clock,
            diagnostics=diagnostics,
        )

    def report(self, events: Iterable[Event]) -> None:
        """Feed events to a fresh reporter and shut it down.

        Args:
            events: Lifecycle events in delivery order.

        Raises:
            NoScenarioSucceededError: No scenario succeeded.
        """
        reporter = self._create_reporter(None)
        try:
            for event in events:
                reporter.handle(event)
        finally:
            reporter.close()

    @contextmanager
    def session(self, diagnostics: DiagnosticBuffer | None = None) -> Iterator[TeamCityReporter]:
        """Context manager for event-by-event delivery.

        Usage:
            with service.session() as reporter:
                reporter.feature_started("Login")
                ...

        Args:
            diagnostics: Buffer shared with the host. New if None.

        Raises:
            NoScenarioSucceededError: No scenario succeeded (on exit).
        """
        reporter = self._create_reporter(diagnostics)
        try:
            yield reporter
        finally:
            reporter.close()
