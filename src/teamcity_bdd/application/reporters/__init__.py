"""Reporters for test lifecycle events.

TeamCityReporter writes TeamCity service messages. Any object satisfying
the EventSink protocol can be used by the host adapters instead.
"""

from teamcity_bdd.application.reporters.diagnostics import DiagnosticBuffer
from teamcity_bdd.application.reporters.teamcity import TeamCityReporter

__all__ = [
    "DiagnosticBuffer",
    "TeamCityReporter",
]
