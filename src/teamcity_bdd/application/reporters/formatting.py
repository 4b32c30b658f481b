"""Human-readable rendering of steps, exceptions and outline rows."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from teamcity_bdd.infrastructure.clock import format_time_short

if TYPE_CHECKING:
    from datetime import datetime

    from teamcity_bdd.domain.events import ExceptionRaised, StepResult


_CELL_SEPARATOR = re.compile(r"(?<!\\)\|")


def format_step_line(moment: datetime, result: StepResult, *, width: int = 90) -> str:
    """Render step summary: time, status, keyword, text, location.

    Example:
        12:00:01.250     passed Given a user named "bob"   @ features/steps.py:12
    """
    return "%s %10s %s %-*s @ %s" % (  # noqa: UP031
        format_time_short(moment),
        result.status.value,
        result.keyword.strip(),
        width,
        result.step.text,
        result.step.location,
    )


def format_exception(event: ExceptionRaised) -> str:
    """Render exception: "message (Type)" followed by stack frames."""
    return "\n".join([f"{event.message} ({event.type_name})", *event.frames])


def quote_scenario_name(name: str) -> str:
    """Render plain scenario display name: the name in double quotes."""
    return f'"{name}"'


def split_table_row(row: str) -> list[str]:
    r"""Split "| a | b |" into trimmed cell values ["a", "b"].

    "\|" inside a cell is a literal pipe, not a separator.
    """
    cells = row.strip()
    if cells.startswith("|"):
        cells = cells[1:]
    if cells.endswith("|") and not cells.endswith("\\|"):
        cells = cells[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _CELL_SEPARATOR.split(cells)]


def outline_row_name(template: str | None, row: str) -> str:
    """Render example row display name.

    Example:
        outline_row_name('"Login as <user>"', "| alice | secret |")
        -> '"Login as <user>" ("alice", "secret")'
    """
    values = ", ".join(f'"{cell}"' for cell in split_table_row(row))
    return f"{template or ''} ({values})".strip()
