"""Per-scenario step outcome counters and the verdict derived from them."""

from __future__ import annotations

from dataclasses import dataclass

from teamcity_bdd.domain.model.step_status import StepStatus


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of a finished scenario.

    Attributes:
        succeeded: True if the scenario passed.
        message: Failure summary. Empty when succeeded.
    """

    succeeded: bool
    message: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.succeeded and self.message:
            raise ValueError("successful verdict must not carry a message")
        if not self.succeeded and not self.message:
            raise ValueError("failed verdict must carry a message")


@dataclass(frozen=True, slots=True)
class StepCounters:
    """Step outcome counters of the currently open scenario.

    Immutable: record() returns a new instance, reset is replacement with
    StepCounters.empty(). All three counters therefore always reset together.

    Attributes:
        passed: Number of passed steps.
        failed: Number of failed and undefined steps.
        other: Number of steps with any other status.
    """

    passed: int = 0
    failed: int = 0
    other: int = 0

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.passed < 0:
            raise ValueError(f"passed must be >= 0, got {self.passed}")
        if self.failed < 0:
            raise ValueError(f"failed must be >= 0, got {self.failed}")
        if self.other < 0:
            raise ValueError(f"other must be >= 0, got {self.other}")

    @classmethod
    def empty(cls) -> StepCounters:
        """Create zeroed counters."""
        return cls()

    @property
    def total(self) -> int:
        """Total number of recorded steps."""
        return self.passed + self.failed + self.other

    def record(self, status: StepStatus) -> StepCounters:
        """Count one step outcome.

        UNDEFINED counts as failed.

        Args:
            status: Outcome of the step.

        Returns:
            New counters with the outcome added.
        """
        match status:
            case StepStatus.PASSED:
                return StepCounters(self.passed + 1, self.failed, self.other)
            case StepStatus.FAILED | StepStatus.UNDEFINED:
                return StepCounters(self.passed, self.failed + 1, self.other)
            case _:
                return StepCounters(self.passed, self.failed, self.other + 1)

    def verdict(self) -> Verdict:
        """Compute scenario verdict.

        Succeeded iff at least one step passed and nothing else happened.
        A scenario without any steps fails.
        """
        if self.passed > 0 and self.failed == 0 and self.other == 0:
            return Verdict(succeeded=True)

        message = f"{self.passed} steps passed, {self.failed} steps failed"
        if self.other > 0:
            message += f", {self.other} steps with other statuses"
        return Verdict(succeeded=False, message=message)
