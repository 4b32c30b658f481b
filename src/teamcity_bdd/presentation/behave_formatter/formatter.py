"""behave Formatter adapter: behave model callbacks → lifecycle events.

behave expands scenario outlines itself and reports each example as a
plain scenario. The adapter restores the outline structure: before the
first example of an outline it opens the outline and enters its table,
then reports every example as a table row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from behave.formatter.base import Formatter

from teamcity_bdd.application.reporters.teamcity import TeamCityReporter
from teamcity_bdd.domain.events import (
    ExceptionRaised,
    FeatureStarted,
    OutlineTableEntered,
    ScenarioStarted,
    StepDescriptor,
    StepResult,
)
from teamcity_bdd.domain.model.configuration import ReporterConfig
from teamcity_bdd.domain.model.step_status import StepStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from teamcity_bdd.domain.ports.event_sink import EventSink

logger = logging.getLogger(__name__)


class TeamCityFormatter(Formatter):  # type: ignore[misc]
    """TeamCity service messages for behave runs.

    close() shuts the reporter down and fails the run if no scenario
    succeeded (NoScenarioSucceededError propagates out of behave).
    """

    name = "teamcity"
    description = "TeamCity service messages"

    def __init__(self, stream_opener: Any, config: Any) -> None:
        super().__init__(stream_opener, config)
        self.stream = self.open()
        userdata = getattr(config, "userdata", None) or {}
        self.reporter: EventSink = TeamCityReporter(
            self.stream,
            config=ReporterConfig.from_mapping(userdata),
        )
        self._outline_of: dict[int, Any] = {}
        self._current_outline: Any = None

    def uri(self, uri: str) -> None:
        logger.debug("Processing %s", uri)

    def feature(self, feature: Any) -> None:
        # behave >= 1.2.7 keeps rules apart from the feature's own scenarios
        children = [*feature.scenarios, *getattr(feature, "rules", ())]
        self._outline_of = dict(_outline_examples(children))
        self._current_outline = None
        self.reporter.handle(FeatureStarted(feature.name))

    def scenario(self, scenario: Any) -> None:
        outline = self._outline_of.get(id(scenario))
        if outline is None:
            self._current_outline = None
            self.reporter.handle(ScenarioStarted(scenario.name))
            return

        if outline is not self._current_outline:
            self._current_outline = outline
            self.reporter.handle(ScenarioStarted(outline.name))
            self.reporter.handle(OutlineTableEntered())

        row = getattr(scenario, "_row", None)
        name = format_row(row.cells) if row is not None else scenario.name
        self.reporter.handle(ScenarioStarted(name))

    def result(self, step: Any) -> None:
        self.reporter.handle(
            StepResult(
                step.keyword,
                StepDescriptor(text=step.name, location=str(step.location)),
                StepStatus.parse(step.status),
            )
        )
        exception = getattr(step, "exception", None)
        if exception is not None:
            tb = getattr(step, "exc_traceback", None)
            self.reporter.handle(ExceptionRaised.from_exception(exception, tb))

    def close(self) -> None:
        try:
            self.reporter.close()
        finally:
            super().close()


def format_row(cells: Iterable[object]) -> str:
    r"""Render example row cells as a table row: "| a | b |".

    A literal "|" inside a cell is written as "\|", the Gherkin table escape.
    """
    return "| " + " | ".join(str(cell).replace("|", "\\|") for cell in cells) + " |"


def _outline_examples(scenarios: Iterable[Any]) -> Iterator[tuple[int, Any]]:
    """Yield (id(example scenario), outline) for every outline example.

    Recurses into rules. Plain scenarios are skipped.
    """
    for item in scenarios:
        match getattr(item, "type", None):
            case "scenario_outline":
                for example in item.scenarios:
                    yield id(example), item
            case "rule":
                yield from _outline_examples(item.scenarios)
            case _:
                continue
