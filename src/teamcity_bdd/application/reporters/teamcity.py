"""TeamCity reporter: lifecycle events → service message lines.

State machine with one feature slot and one scenario slot:

    FeatureStarted        finish open scenario/feature, open feature
    ScenarioStarted       finish open scenario, open scenario (or example row)
    OutlineTableEntered   open scenario becomes the outline template (ignored)
    StepResult            count outcome, attach step line as stdout
    ExceptionRaised       buffer rendered exception as diagnostics
    close()               finish scenario, finish feature, check run verdict

Contracts:
    - Diagnostics drained strictly BEFORE every boundary message
    - Output flushed after every event
    - close() runs once; NoScenarioSucceededError raised after all output
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Self

from teamcity_bdd.application.protocol.service_message import (
    MessageName,
    format_message,
    format_single,
)
from teamcity_bdd.application.reporters.diagnostics import DiagnosticBuffer
from teamcity_bdd.application.reporters.formatting import (
    format_exception,
    format_step_line,
    outline_row_name,
    quote_scenario_name,
)
from teamcity_bdd.domain.events import (
    Event,
    ExceptionRaised,
    FeatureStarted,
    OutlineTableEntered,
    ScenarioStarted,
    StepDescriptor,
    StepResult,
    get_event_kind,
)
from teamcity_bdd.domain.exceptions import (
    NoScenarioSucceededError,
    ReporterClosedError,
    UnknownEventError,
)
from teamcity_bdd.domain.model.configuration import ReporterConfig
from teamcity_bdd.domain.model.step_counters import StepCounters
from teamcity_bdd.domain.model.step_status import StepStatus
from teamcity_bdd.infrastructure.clock import SystemClock, format_timestamp

if TYPE_CHECKING:
    from types import TracebackType

    from teamcity_bdd.domain.ports.clock import Clock
    from teamcity_bdd.domain.ports.event_sink import OutputSink

logger = logging.getLogger(__name__)


class TeamCityReporter:
    """Translates test lifecycle events into TeamCity service messages.

    Implements EventSink. One instance per run.

    Thread Safety:
      - _lock serializes handle() and close(); counters and diagnostics
        are never touched by two events at once
    """

    def __init__(
        self,
        output: OutputSink,
        *,
        config: ReporterConfig | None = None,
        clock: Clock | None = None,
        diagnostics: DiagnosticBuffer | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Sink for service message lines.
            config: Reporter configuration. Uses defaults if None.
            clock: Timestamp source. Wall clock if None.
            diagnostics: Diagnostic buffer shared with the host. New if None.
        """
        self._output = output
        self._config = config or ReporterConfig()
        self._clock = clock or SystemClock()
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticBuffer()
        self._lock = threading.Lock()

        self._current_feature: str | None = None
        self._current_scenario: str | None = None
        self._outline_template: str | None = None
        self._counters = StepCounters.empty()
        self._any_success = False
        self._scenarios_finished = 0
        self._closed = False

    # -------------------------------------------------------------------------
    # State (read-only)
    # -------------------------------------------------------------------------

    @property
    def config(self) -> ReporterConfig:
        return self._config

    @property
    def diagnostics(self) -> DiagnosticBuffer:
        """Writable diagnostic sink. Drained at the next boundary message."""
        return self._diagnostics

    @property
    def current_feature(self) -> str | None:
        return self._current_feature

    @property
    def current_scenario(self) -> str | None:
        return self._current_scenario

    @property
    def counters(self) -> StepCounters:
        return self._counters

    @property
    def any_success(self) -> bool:
        return self._any_success

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Event interface
    # -------------------------------------------------------------------------

    def handle(self, event: Event) -> None:
        """Process one lifecycle event and flush output.

        Raises:
            ReporterClosedError: close() already ran.
            UnknownEventError: event is not a lifecycle event.
        """
        with self._lock:
            if self._closed:
                raise ReporterClosedError
            self._dispatch(event)
            logger.debug("Handled %s", get_event_kind(event).value)
            self._output.flush()

    def feature_started(self, name: str) -> None:
        self.handle(FeatureStarted(name))

    def scenario_started(self, name: str) -> None:
        self.handle(ScenarioStarted(name))

    def outline_table_entered(self) -> None:
        self.handle(OutlineTableEntered())

    def step_result(self, keyword: str, step: StepDescriptor, status: StepStatus | str) -> None:
        self.handle(StepResult(keyword, step, StepStatus.parse(status)))

    def exception_raised(self, exc: BaseException, tb: TracebackType | None = None) -> None:
        self.handle(ExceptionRaised.from_exception(exc, tb))

    def close(self) -> None:
        """Shut the run down. Runs once; later calls are no-ops.

        Finishes the open scenario and feature, flushes output, then checks
        that at least one scenario succeeded.

        Raises:
            NoScenarioSucceededError: No scenario succeeded and
                config.require_success is set.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                if self._current_scenario is not None:
                    self._finish_scenario()
                if self._current_feature is not None:
                    self._finish_feature()
                self._drain_diagnostics()
            finally:
                self._output.flush()

            logger.debug(
                "Run closed: %d scenarios finished, any_success=%s",
                self._scenarios_finished,
                self._any_success,
            )
            if not self._any_success and self._config.require_success:
                logger.warning("No scenario succeeded in this run")
                raise NoScenarioSucceededError(self._scenarios_finished)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _dispatch(self, event: Event) -> None:
        """Exhaustive match over Event union."""
        match event:
            case FeatureStarted(name=name):
                self._start_feature(name)
            case ScenarioStarted():
                self._start_scenario(event)
            case OutlineTableEntered():
                self._enter_outline_table()
            case StepResult():
                self._record_step(event)
            case ExceptionRaised():
                self._diagnostics.writeln(format_exception(event))
            case _:
                raise UnknownEventError(type(event))

    def _start_feature(self, name: str) -> None:
        if self._current_feature is not None:
            if self._current_scenario is not None:
                self._finish_scenario()
            self._finish_feature()

        self._drain_diagnostics()
        self._current_feature = name
        logger.debug("Feature started: %s", name)
        self._emit(
            format_message(
                MessageName.TEST_SUITE_STARTED,
                {"timestamp": self._timestamp(), "name": name},
            ),
            format_single(MessageName.PROGRESS_MESSAGE, f"running feature: {name}"),
        )

    def _start_scenario(self, event: ScenarioStarted) -> None:
        if self._current_scenario is not None:
            self._finish_scenario()

        if event.is_example_row:
            name = outline_row_name(self._outline_template, event.name)
        else:
            name = quote_scenario_name(event.name)

        self._drain_diagnostics()
        self._current_scenario = name
        self._counters = StepCounters.empty()
        logger.debug("Scenario started: %s", name)
        self._emit(
            format_message(
                MessageName.TEST_STARTED,
                {
                    "timestamp": self._timestamp(),
                    "name": name,
                    "captureStandardOutput": "true",
                },
            ),
            format_single(MessageName.PROGRESS_MESSAGE, f"running scenario: {name}"),
        )

    def _enter_outline_table(self) -> None:
        # Outline header is not a runnable test. Rows arrive as ScenarioStarted.
        self._outline_template = self._current_scenario
        self._drain_diagnostics()
        logger.debug("Outline table entered: %s", self._outline_template)
        self._emit(
            format_message(
                MessageName.TEST_IGNORED,
                {
                    "timestamp": self._timestamp(),
                    "name": self._current_scenario or "",
                    "message": self._config.outline_ignored_message,
                },
            ),
        )
        self._counters = StepCounters.empty()
        self._current_scenario = None

    def _record_step(self, event: StepResult) -> None:
        line = format_step_line(self._clock.now(), event, width=self._config.step_text_width)

        if event.status is StepStatus.UNDEFINED:
            self._diagnostics.writeln(self._config.undefined_step_note)
        self._counters = self._counters.record(event.status)

        self._emit(
            format_message(
                MessageName.TEST_STD_OUT,
                {"name": self._current_scenario or "", "out": line},
            ),
        )

    def _finish_scenario(self) -> None:
        name = self._current_scenario or ""
        verdict = self._counters.verdict()

        self._drain_diagnostics()
        if verdict.succeeded:
            self._any_success = True
        else:
            self._emit(
                format_message(
                    MessageName.TEST_FAILED,
                    {"timestamp": self._timestamp(), "name": name, "message": verdict.message},
                ),
            )
        self._emit(
            format_message(
                MessageName.TEST_FINISHED,
                {"timestamp": self._timestamp(), "name": name},
            ),
        )
        logger.debug("Scenario finished: %s (succeeded=%s)", name, verdict.succeeded)

        self._scenarios_finished += 1
        self._counters = StepCounters.empty()
        self._current_scenario = None

    def _finish_feature(self) -> None:
        name = self._current_feature or ""
        self._drain_diagnostics()
        self._emit(
            format_message(
                MessageName.TEST_SUITE_FINISHED,
                {"timestamp": self._timestamp(), "name": name},
            ),
        )
        logger.debug("Feature finished: %s", name)
        self._current_feature = None

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def _drain_diagnostics(self) -> None:
        """Emit buffered diagnostics for the entity that is still current."""
        text = self._diagnostics.drain()
        if not text:
            return
        owner = self._current_scenario or self._current_feature or ""
        self._emit(format_message(MessageName.TEST_STD_ERR, {"name": owner, "out": text}))

    def _emit(self, *lines: str) -> None:
        for line in lines:
            self._output.write(f"{line}\n")

    def _timestamp(self) -> str:
        return format_timestamp(self._clock.now())
