"""Timestamp parsing for the CSV time column.

This module converts time cells to absolute Unix seconds.
It accepts epoch numbers, ISO-8601 strings, or a custom strptime format.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import math

from core.errors import SluiceTimeParseError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


def parse_timestamp(value: str, time_format: str | None = None) -> int:
    """Parse a time cell into Unix seconds.

    Args:
        value: Raw cell text.
        time_format: Optional ``strptime`` format. When omitted the value
            may be integer or decimal epoch seconds, or ISO-8601.

    Returns:
        Unix seconds, floored to a whole second.

    Raises:
        SluiceTimeParseError: If the value cannot be parsed.
    """
    text = value.strip()
    if not text:
        raise SluiceTimeParseError("empty time value")
    if time_format is not None:
        return _to_unix_seconds(_parse_with_format(text, time_format))
    epoch_seconds = _parse_epoch_seconds(text)
    if epoch_seconds is not None:
        return epoch_seconds
    return _to_unix_seconds(_parse_iso(text))


def _parse_epoch_seconds(text: str) -> int | None:
    """Return epoch seconds for numeric cells, ``None`` otherwise."""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        seconds = float(text)
    except ValueError:
        return None
    if not math.isfinite(seconds):
        raise SluiceTimeParseError(f"time value '{text}' is not a finite number")
    return int(seconds // 1)


def _parse_iso(text: str) -> datetime:
    """Parse ISO-8601 / RFC 3339 text, accepting a trailing ``Z``."""
    normalized = text[:-1] + "+00:00" if text[-1] in ("Z", "z") else text
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as error:
        raise SluiceTimeParseError(
            f"time value '{text}' is not epoch seconds or ISO-8601: {error}"
        ) from error


def _parse_with_format(text: str, time_format: str) -> datetime:
    try:
        return datetime.strptime(text, time_format)
    except ValueError as error:
        raise SluiceTimeParseError(
            f"time value '{text}' does not match format '{time_format}': {error}"
        ) from error


def _to_unix_seconds(moment: datetime) -> int:
    """Convert a datetime to Unix seconds, treating naive values as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // _ONE_SECOND
