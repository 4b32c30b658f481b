"""Test factories for creating domain objects and reading output.

Centralized factory functions to avoid duplication across test modules.
All factories follow the same pattern: accept simplified parameters,
return fully constructed domain objects.
"""

from datetime import datetime
from io import StringIO

from teamcity_bdd.application.reporters.teamcity import TeamCityReporter
from teamcity_bdd.domain.events import ExceptionRaised, StepDescriptor, StepResult
from teamcity_bdd.domain.model.configuration import ReporterConfig
from teamcity_bdd.domain.model.step_status import StepStatus
from teamcity_bdd.infrastructure.clock import FixedClock

# Fixed instant - consistent across all tests
DEFAULT_INSTANT = datetime(2024, 1, 2, 3, 4, 5, 678000)
DEFAULT_TIMESTAMP = "2024-01-02T03:04:05.678"
DEFAULT_LOCATION = "features/login.feature:3"


def make_step(text: str = "a registered user", location: str = DEFAULT_LOCATION) -> StepDescriptor:
    """Create a StepDescriptor for tests."""
    return StepDescriptor(text=text, location=location)


def make_step_result(
    status: StepStatus = StepStatus.PASSED,
    keyword: str = "Given",
    text: str = "a registered user",
    location: str = DEFAULT_LOCATION,
) -> StepResult:
    """Create a StepResult for tests."""
    return StepResult(keyword=keyword, step=make_step(text, location), status=status)


def make_exception_raised(
    message: str = "boom",
    type_name: str = "AssertionError",
    frames: tuple[str, ...] = ('  File "steps.py", line 7, in step_impl',),
) -> ExceptionRaised:
    """Create an ExceptionRaised event for tests."""
    return ExceptionRaised(message=message, type_name=type_name, frames=frames)


def make_reporter(
    output: StringIO | None = None,
    config: ReporterConfig | None = None,
) -> tuple[TeamCityReporter, StringIO]:
    """Create a reporter on a fixed clock writing to an in-memory stream."""
    stream = output if output is not None else StringIO()
    reporter = TeamCityReporter(stream, config=config, clock=FixedClock(DEFAULT_INSTANT))
    return reporter, stream


def output_lines(stream: StringIO) -> list[str]:
    """Split reporter output into message lines."""
    return stream.getvalue().splitlines()


def message_name(line: str) -> str:
    """Extract message name from a service message line."""
    assert line.startswith("##teamcity["), line
    return line[len("##teamcity[") :].split(" ", 1)[0].rstrip("]")


def message_names(stream: StringIO) -> list[str]:
    """Message names of all output lines, in order."""
    return [message_name(line) for line in output_lines(stream)]
