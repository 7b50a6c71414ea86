"""Header to path/field resolution.

This module maps fully-qualified CSV headers onto entity paths and
field names, and checks headers against caller allow-lists.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.constants import PATH_SEPARATOR
from core.errors import SluiceSchemaError, SluiceValidationError
from core.types import ColumnTarget


def resolve_columns(headers: Sequence[str]) -> tuple[ColumnTarget, ...]:
    """Resolve data columns into path and field name pairs.

    Each header after the time column is split on its last separator,
    so ``coinbase.btcusd.price`` maps to ``coinbase.btcusd`` / ``price``.

    Args:
        headers: Full header row including the time column.

    Returns:
        Targets indexed by ``column - 1``.

    Raises:
        SluiceSchemaError: If any data header has no separator.
    """
    targets: list[ColumnTarget] = []
    for header in headers[1:]:
        path, separator, field_name = header.rpartition(PATH_SEPARATOR)
        if not separator:
            raise SluiceSchemaError(
                f"header '{header}' expected to be fully-qualified. "
                f"Name columns as '<path>{PATH_SEPARATOR}<field>'."
            )
        targets.append(ColumnTarget(path=path, field_name=field_name))
    return tuple(targets)


def validate_allowed_fields(
    headers: Sequence[str],
    valid_fields: Iterable[str] | None,
) -> None:
    """Fail when a data header is outside the allow-list.

    Args:
        headers: Full header row including the time column.
        valid_fields: Allowed header strings, or ``None`` to accept all.

    Raises:
        SluiceValidationError: On the first header not in the allow-list.
    """
    if valid_fields is None:
        return
    allowed = set(valid_fields)
    for header in headers[1:]:
        if header not in allowed:
            raise SluiceValidationError(f"unknown field '{header}'")
