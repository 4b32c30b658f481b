"""Application services."""

from teamcity_bdd.application.services.session import ReportingService

__all__ = ["ReportingService"]
