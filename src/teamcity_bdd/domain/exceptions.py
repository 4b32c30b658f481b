"""Domain exceptions: all public errors of teamcity-bdd.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application/Presentation use these, not define their own public exceptions.
"""

from __future__ import annotations


class TeamCityBddError(Exception):
    """Base for all teamcity-bdd exceptions.

    Allows: except TeamCityBddError to catch all library errors.
    """


class NoScenarioSucceededError(TeamCityBddError, RuntimeError):
    """Run finished without a single successful scenario.

    Raised by shutdown AFTER all pending finish messages are written,
    so the CI consumer still receives complete output.

    Attributes:
        scenarios_finished: Number of scenarios that reached a verdict.
    """

    def __init__(self, scenarios_finished: int = 0) -> None:
        """Initialize with number of finished scenarios."""
        self.scenarios_finished = scenarios_finished
        super().__init__(f"No scenario succeeded ({scenarios_finished} finished)")


class ReporterClosedError(TeamCityBddError, RuntimeError):
    """Event delivered after reporter shutdown.

    Inherits RuntimeError for semantic correctness (invalid state).
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Reporter already closed")


class UnknownEventError(TeamCityBddError, TypeError):
    """Object passed to handle() is not a lifecycle event.

    Attributes:
        got: Actual type received.
    """

    def __init__(self, got: type) -> None:
        """Initialize with the offending type."""
        self.got = got
        super().__init__(f"Expected lifecycle event, got {got.__name__}")


class ConfigurationError(TeamCityBddError, ValueError):
    """Invalid reporter configuration.

    FAIL-FIRST: raised at construction, never during a run.

    Attributes:
        field: Name of invalid field.
        reason: Why the value is invalid.
    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize with field name and reason."""
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid configuration '{field}': {reason}")
