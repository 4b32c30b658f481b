"""Domain layer: immutable lifecycle events delivered by the test runner.

Closed set of variants. The reporter's transition function is an
exhaustive match over the Event union.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from teamcity_bdd.domain.model.step_status import StepStatus

if TYPE_CHECKING:
    from types import TracebackType


class EventKind(Enum):
    """Kinds of lifecycle events."""

    FEATURE_STARTED = "FEATURE_STARTED"
    SCENARIO_STARTED = "SCENARIO_STARTED"
    OUTLINE_TABLE_ENTERED = "OUTLINE_TABLE_ENTERED"
    STEP_RESULT = "STEP_RESULT"
    EXCEPTION_RAISED = "EXCEPTION_RAISED"


@dataclass(frozen=True, slots=True)
class StepDescriptor:
    """Renderable step: text with arguments filled in, plus source location.

    Attributes:
        text: Step text as shown to the user.
        location: Source location, usually "path:line".
    """

    text: str
    location: str = ""


@dataclass(frozen=True, slots=True)
class FeatureStarted:
    """FEATURE_STARTED: a new feature begins."""

    name: str


@dataclass(frozen=True, slots=True)
class ScenarioStarted:
    """SCENARIO_STARTED: a scenario or an outline example row begins.

    A name containing "|" is an example row of the current outline.
    """

    name: str

    @property
    def is_example_row(self) -> bool:
        """True if name is a table row of the current outline."""
        return "|" in self.name


@dataclass(frozen=True, slots=True)
class OutlineTableEntered:
    """OUTLINE_TABLE_ENTERED: the open scenario is an outline template."""


@dataclass(frozen=True, slots=True)
class StepResult:
    """STEP_RESULT: a step finished with a status."""

    keyword: str
    step: StepDescriptor
    status: StepStatus


@dataclass(frozen=True, slots=True)
class ExceptionRaised:
    """EXCEPTION_RAISED: a step or hook raised.

    Attributes:
        message: Exception message.
        type_name: Exception class name.
        frames: Rendered stack frames, outermost first.
    """

    message: str
    type_name: str
    frames: tuple[str, ...] = ()

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        tb: TracebackType | None = None,
    ) -> ExceptionRaised:
        """Capture exception as event.

        Args:
            exc: Raised exception.
            tb: Traceback to render. Defaults to exc.__traceback__.

        Returns:
            ExceptionRaised with one entry per stack frame.
        """
        frames = traceback.format_tb(tb if tb is not None else exc.__traceback__)
        return cls(
            message=str(exc),
            type_name=type(exc).__name__,
            frames=tuple(frame.rstrip("\n") for frame in frames),
        )


Event = FeatureStarted | ScenarioStarted | OutlineTableEntered | StepResult | ExceptionRaised


def get_event_kind(event: Event) -> EventKind:
    """Get EventKind for event.

    Exhaustive match on Event union. Type system ensures all cases covered.
    """
    match event:
        case FeatureStarted():
            return EventKind.FEATURE_STARTED
        case ScenarioStarted():
            return EventKind.SCENARIO_STARTED
        case OutlineTableEntered():
            return EventKind.OUTLINE_TABLE_ENTERED
        case StepResult():
            return EventKind.STEP_RESULT
        case ExceptionRaised():
            return EventKind.EXCEPTION_RAISED
