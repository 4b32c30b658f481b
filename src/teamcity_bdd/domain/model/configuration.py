"""Reporter configuration.

Immutable configuration DTO. Defaults reproduce the stock TeamCity output;
hosts override individual fields (behave userdata, pytest fixture override).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from teamcity_bdd.domain.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_PREFIX = "teamcity."

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ReporterConfig:
    """Configuration of TeamCityReporter.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        require_success: Shutdown fails the run when no scenario succeeded.
        outline_ignored_message: testIgnored message for outline headers.
        undefined_step_note: Diagnostic note written for undefined steps.
        step_text_width: Minimum width of step text in rendered step lines.
    """

    require_success: bool = True
    outline_ignored_message: str = "This is a scenario outline, not a real scenario"
    undefined_step_note: str = "The step could not be matched to a step implementation."
    step_text_width: int = 90

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.outline_ignored_message.strip():
            raise ConfigurationError("outline_ignored_message", "must not be empty")
        if not self.undefined_step_note.strip():
            raise ConfigurationError("undefined_step_note", "must not be empty")
        if self.step_text_width < 0:
            raise ConfigurationError(
                "step_text_width", f"must be >= 0, got {self.step_text_width}"
            )

    @classmethod
    def from_mapping(
        cls,
        values: Mapping[str, str],
        *,
        prefix: str = DEFAULT_PREFIX,
    ) -> ReporterConfig:
        """Build config from string key/value settings.

        Only keys starting with prefix are considered; the rest of the key
        must name a field. Unset fields keep their defaults.

        Example:
            ReporterConfig.from_mapping({"teamcity.require_success": "false"})

        Args:
            values: Host settings (e.g. behave userdata).
            prefix: Key prefix selecting reporter settings.

        Returns:
            Validated ReporterConfig.

        Raises:
            ConfigurationError: Unknown key or unparsable value.
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, object] = {}

        for key, raw in values.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix) :]
            if name not in known:
                raise ConfigurationError(name, "unknown setting")
            kwargs[name] = _convert(name, known[name].type, raw)

        return cls(**kwargs)  # type: ignore[arg-type]


def _convert(name: str, annotation: object, raw: object) -> object:
    """Convert raw setting to the field's type (annotations are strings)."""
    if not isinstance(raw, str):
        return raw

    match annotation:
        case "bool":
            value = raw.strip().lower()
            if value in _TRUE:
                return True
            if value in _FALSE:
                return False
            raise ConfigurationError(name, f"expected boolean, got {raw!r}")
        case "int":
            try:
                return int(raw)
            except ValueError:
                raise ConfigurationError(name, f"expected integer, got {raw!r}") from None
        case _:
            return raw
