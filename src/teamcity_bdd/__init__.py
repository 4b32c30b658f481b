"""teamcity-bdd - TeamCity service message reporter for BDD test runs."""

__version__ = "0.1.0"

from teamcity_bdd.application.reporters.teamcity import TeamCityReporter
from teamcity_bdd.domain.model.configuration import ReporterConfig

__all__ = ["ReporterConfig", "TeamCityReporter", "__version__"]
