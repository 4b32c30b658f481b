"""Domain model entities."""

from teamcity_bdd.domain.model.configuration import ReporterConfig
from teamcity_bdd.domain.model.step_counters import StepCounters, Verdict
from teamcity_bdd.domain.model.step_status import StepStatus

__all__ = [
    "ReporterConfig",
    "StepCounters",
    "StepStatus",
    "Verdict",
]
