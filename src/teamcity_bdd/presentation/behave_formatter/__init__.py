"""behave formatter emitting TeamCity service messages.

Register in behave.ini (or setup.cfg / pyproject.toml):

    [behave.formatters]
    teamcity = teamcity_bdd.presentation.behave_formatter:TeamCityFormatter

and run:

    behave -f teamcity

Settings are read from userdata with the "teamcity." prefix:

    behave -f teamcity -D teamcity.require_success=false
"""

from teamcity_bdd.presentation.behave_formatter.formatter import TeamCityFormatter

__all__ = ["TeamCityFormatter"]
