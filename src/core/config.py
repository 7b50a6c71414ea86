"""Runtime configuration model for Sluice processors.

This module owns option parsing and validation for processor init.
Other modules consume a typed config object instead of raw mappings.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from core.constants import TIME_FORMAT_ENV_VAR, TIME_FORMAT_PARAM
from core.errors import SluiceConfigError


@dataclass(frozen=True)
class ProcessorConfig:
    """Validated processor configuration.

    Attributes:
        time_format: Optional ``strptime`` format for the timestamp column.
            When absent, Unix seconds and ISO-8601 values are accepted.
    """

    time_format: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, object] | None) -> "ProcessorConfig":
        """Build config from a processor init mapping.

        Unrecognized keys are ignored.

        Args:
            params: Option mapping supplied by the host, possibly ``None``.

        Returns:
            A validated config object.

        Raises:
            SluiceConfigError: If a recognized option has an invalid value.
        """
        if not params or TIME_FORMAT_PARAM not in params:
            return cls()
        return cls(time_format=_parse_time_format(params[TIME_FORMAT_PARAM], TIME_FORMAT_PARAM))

    @classmethod
    def from_env(cls) -> "ProcessorConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SluiceConfigError: If environment values are invalid.
        """
        raw_value = os.getenv(TIME_FORMAT_ENV_VAR)
        if raw_value is None:
            return cls()
        return cls(time_format=_parse_time_format(raw_value, TIME_FORMAT_ENV_VAR))


def _parse_time_format(raw_value: object, source_name: str) -> str | None:
    """Validate a configured time format string.

    Args:
        raw_value: Raw option value.
        source_name: Option or variable name for error context.

    Returns:
        The format string, or ``None`` for a blank value.

    Raises:
        SluiceConfigError: If value is not a string.
    """
    if not isinstance(raw_value, str):
        raise SluiceConfigError(
            f"Invalid {source_name} value: expected a strptime format string, "
            f"got {raw_value!r}. Set it to a format such as '%Y-%m-%d %H:%M:%S%z'."
        )
    if not raw_value.strip():
        return None
    return raw_value
