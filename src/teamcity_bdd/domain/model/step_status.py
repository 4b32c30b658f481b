"""Step outcome status reported by the host test runner."""

from __future__ import annotations

from enum import Enum


class StepStatus(Enum):
    """Status of an executed step.

    Only PASSED, FAILED and UNDEFINED are treated specially by the reporter.
    Every other member counts as "other" in the step counters.
    """

    PASSED = "passed"
    FAILED = "failed"
    UNDEFINED = "undefined"
    SKIPPED = "skipped"
    PENDING = "pending"
    UNTESTED = "untested"
    OTHER = "other"

    @classmethod
    def parse(cls, status: object) -> StepStatus:
        """Map host status to StepStatus.

        Accepts StepStatus, plain strings and enum-like objects with a
        ``name`` attribute (e.g. behave's Status). Unknown names map to OTHER.

        Args:
            status: Host status value.

        Returns:
            Matching StepStatus, OTHER if nothing matches.
        """
        if isinstance(status, cls):
            return status
        name = status if isinstance(status, str) else getattr(status, "name", str(status))
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.OTHER

    def __str__(self) -> str:
        return self.value
