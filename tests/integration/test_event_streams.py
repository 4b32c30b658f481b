"""End-to-end event streams through TeamCityReporter.

Full expected output for typical runs, using the pytest plugin fixtures
(fixed clock, in-memory stream).
"""

from io import StringIO

import pytest

from teamcity_bdd.application.reporters.teamcity import TeamCityReporter
from teamcity_bdd.domain.events import StepDescriptor
from teamcity_bdd.domain.exceptions import NoScenarioSucceededError
from teamcity_bdd.domain.model.configuration import ReporterConfig

T = "2024-01-02T03:04:05.678"

pytestmark = pytest.mark.teamcity


def _lines(stream: StringIO) -> list[str]:
    return stream.getvalue().splitlines()


def _stdout(name: str, status: str, keyword: str, text: str, location: str) -> str:
    step = f"03:04:05.678 {status:>10} {keyword} {text:<20} @ {location}"
    return f"##teamcity[testStdOut name='{name}' out='{step}']"


@pytest.fixture
def teamcity_config() -> ReporterConfig:
    """Narrow step lines keep expected output readable."""
    return ReporterConfig(step_text_width=20)


class TestLoginFeature:
    """Single passing scenario closed by shutdown."""

    def test_complete_output(
        self,
        teamcity_reporter: TeamCityReporter,
        teamcity_stream: StringIO,
    ) -> None:
        reporter = teamcity_reporter
        reporter.feature_started("Login")
        reporter.scenario_started("succeeds")
        reporter.step_result("Given", StepDescriptor("a user", "login.feature:3"), "passed")
        reporter.step_result("When", StepDescriptor("she logs in", "login.feature:4"), "passed")
        reporter.close()

        assert _lines(teamcity_stream) == [
            f"##teamcity[testSuiteStarted timestamp='{T}' name='Login']",
            "##teamcity[progressMessage 'running feature: Login']",
            f"##teamcity[testStarted timestamp='{T}' name='\"succeeds\"' captureStandardOutput='true']",
            "##teamcity[progressMessage 'running scenario: \"succeeds\"']",
            _stdout('"succeeds"', "passed", "Given", "a user", "login.feature:3"),
            _stdout('"succeeds"', "passed", "When", "she logs in", "login.feature:4"),
            f"##teamcity[testFinished timestamp='{T}' name='\"succeeds\"']",
            f"##teamcity[testSuiteFinished timestamp='{T}' name='Login']",
        ]
        assert reporter.any_success is True


class TestSingleFailingScenario:
    """One failed step is the whole run."""

    def test_failure_then_fatal_shutdown(
        self,
        teamcity_reporter: TeamCityReporter,
        teamcity_stream: StringIO,
    ) -> None:
        reporter = teamcity_reporter
        reporter.feature_started("Checkout")
        reporter.scenario_started("pays")
        reporter.step_result("Then", StepDescriptor("it is paid", "pay.feature:9"), "failed")
        try:
            raise AssertionError("expected PAID, got PENDING")
        except AssertionError as exc:
            reporter.exception_raised(exc)

        with pytest.raises(NoScenarioSucceededError):
            reporter.close()

        lines = _lines(teamcity_stream)
        assert lines[-4].startswith("##teamcity[testStdErr name='\"pays\"' out='expected PAID, got PENDING (AssertionError)|n")
        assert lines[-3:] == [
            f"##teamcity[testFailed timestamp='{T}' name='\"pays\"' message='0 steps passed, 1 steps failed']",
            f"##teamcity[testFinished timestamp='{T}' name='\"pays\"']",
            f"##teamcity[testSuiteFinished timestamp='{T}' name='Checkout']",
        ]

    def test_another_success_keeps_run_alive(
        self,
        teamcity_reporter: TeamCityReporter,
    ) -> None:
        reporter = teamcity_reporter
        reporter.feature_started("Checkout")
        reporter.scenario_started("pays")
        reporter.step_result("Then", StepDescriptor("it is paid"), "failed")
        reporter.scenario_started("browses")
        reporter.step_result("Given", StepDescriptor("a catalogue"), "passed")
        reporter.close()
        assert reporter.closed is True


class TestOutlineFeature:
    """Outline with two example rows across two features."""

    def test_complete_output(
        self,
        teamcity_reporter: TeamCityReporter,
        teamcity_stream: StringIO,
    ) -> None:
        reporter = teamcity_reporter
        reporter.feature_started("Accounts")
        reporter.scenario_started("Login as <user>")
        reporter.outline_table_entered()
        reporter.scenario_started("| alice | ok |")
        reporter.step_result("Given", StepDescriptor("user alice", "a.feature:5"), "passed")
        reporter.scenario_started("| bob | ok |")
        reporter.step_result("Given", StepDescriptor("user bob", "a.feature:5"), "undefined")
        reporter.feature_started("Reports")
        reporter.close()

        alice = '"Login as <user>" ("alice", "ok")'
        bob = '"Login as <user>" ("bob", "ok")'
        assert _lines(teamcity_stream) == [
            f"##teamcity[testSuiteStarted timestamp='{T}' name='Accounts']",
            "##teamcity[progressMessage 'running feature: Accounts']",
            f"##teamcity[testStarted timestamp='{T}' name='\"Login as <user>\"' captureStandardOutput='true']",
            "##teamcity[progressMessage 'running scenario: \"Login as <user>\"']",
            f"##teamcity[testIgnored timestamp='{T}' name='\"Login as <user>\"' "
            "message='This is a scenario outline, not a real scenario']",
            f"##teamcity[testStarted timestamp='{T}' name='{alice}' captureStandardOutput='true']",
            f"##teamcity[progressMessage 'running scenario: {alice}']",
            _stdout(alice, "passed", "Given", "user alice", "a.feature:5"),
            f"##teamcity[testFinished timestamp='{T}' name='{alice}']",
            f"##teamcity[testStarted timestamp='{T}' name='{bob}' captureStandardOutput='true']",
            f"##teamcity[progressMessage 'running scenario: {bob}']",
            _stdout(bob, "undefined", "Given", "user bob", "a.feature:5"),
            f"##teamcity[testStdErr name='{bob}' out='The step could not be matched to a step implementation.']",
            f"##teamcity[testFailed timestamp='{T}' name='{bob}' message='0 steps passed, 1 steps failed']",
            f"##teamcity[testFinished timestamp='{T}' name='{bob}']",
            f"##teamcity[testSuiteFinished timestamp='{T}' name='Accounts']",
            f"##teamcity[testSuiteStarted timestamp='{T}' name='Reports']",
            "##teamcity[progressMessage 'running feature: Reports']",
            f"##teamcity[testSuiteFinished timestamp='{T}' name='Reports']",
        ]
