"""pytest fixtures for TeamCity reporter testing.

User overrides teamcity_config in their conftest.py.
"""

from __future__ import annotations

from datetime import datetime
from io import StringIO

import pytest

from teamcity_bdd.application.reporters.teamcity import TeamCityReporter
from teamcity_bdd.domain.model.configuration import ReporterConfig
from teamcity_bdd.infrastructure.clock import FixedClock

FIXED_INSTANT = datetime(2024, 1, 2, 3, 4, 5, 678000)


@pytest.fixture
def teamcity_clock() -> FixedClock:
    """Clock fixed at FIXED_INSTANT, so timestamps are predictable."""
    return FixedClock(FIXED_INSTANT)


@pytest.fixture
def teamcity_stream() -> StringIO:
    """In-memory output sink. Read with .getvalue()."""
    return StringIO()


@pytest.fixture
def teamcity_config() -> ReporterConfig:
    """Default reporter configuration.

    Override in conftest.py to test custom settings.
    """
    return ReporterConfig()


@pytest.fixture
def teamcity_reporter(
    teamcity_stream: StringIO,
    teamcity_config: ReporterConfig,
    teamcity_clock: FixedClock,
) -> TeamCityReporter:
    """TeamCityReporter writing to teamcity_stream.

    Not closed automatically: tests decide whether and when close() runs,
    since close() may raise NoScenarioSucceededError.
    """
    return TeamCityReporter(
        teamcity_stream,
        config=teamcity_config,
        clock=teamcity_clock,
    )
