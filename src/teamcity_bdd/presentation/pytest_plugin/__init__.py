"""pytest plugin for teamcity-bdd.

Provides fixtures for testing reporters and host adapters:
    teamcity_clock: Fixed clock (2024-01-02T03:04:05.678)
    teamcity_stream: In-memory output sink
    teamcity_config: Reporter configuration (override in conftest.py)
    teamcity_reporter: TeamCityReporter wired to the fixtures above
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Register fixtures from fixtures module
from teamcity_bdd.presentation.pytest_plugin.fixtures import (
    teamcity_clock,
    teamcity_config,
    teamcity_reporter,
    teamcity_stream,
)

if TYPE_CHECKING:
    import pytest

# Export fixtures for pytest discovery
__all__ = [
    "teamcity_clock",
    "teamcity_config",
    "teamcity_reporter",
    "teamcity_stream",
]


def pytest_configure(config: pytest.Config) -> None:
    """Register the teamcity marker."""
    config.addinivalue_line(
        "markers",
        "teamcity: mark test as exercising TeamCity service message output",
    )
