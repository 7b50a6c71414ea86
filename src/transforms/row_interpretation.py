"""Fault-tolerant row interpretation.

This module parses timestamps, numeric cells, and tag cells once per
payload. Bad rows and bad cells are skipped and reported as diagnostics
instead of failing the batch.
"""

from __future__ import annotations

from typing import Sequence

from core.constants import (
    DIAGNOSTIC_INVALID_FIELD,
    DIAGNOSTIC_INVALID_TIMESTAMP,
    TAGS_FIELD_NAME,
)
from core.errors import SluiceTimeParseError
from core.logging_config import get_logger
from core.time_parsing import parse_timestamp
from core.types import (
    InterpretedCell,
    InterpretedRow,
    ParsedTable,
    RowDiagnostic,
    RowInterpretation,
)

_LOGGER = get_logger(__name__)


def interpret_rows(
    table: ParsedTable,
    field_names: Sequence[str],
    time_format: str | None = None,
) -> RowInterpretation:
    """Interpret every data row of a parsed table.

    Args:
        table: Structurally valid table.
        field_names: Field name for each data column; ``field_names[i]``
            names header column ``i + 1``. Columns named with the tags
            marker hold space-separated tags.
        time_format: Optional ``strptime`` format for the time column.

    Returns:
        Rows with a valid timestamp plus diagnostics for skipped input.
    """
    tag_columns = {
        column for column, name in enumerate(field_names, 1) if name == TAGS_FIELD_NAME
    }
    rows: list[InterpretedRow] = []
    diagnostics: list[RowDiagnostic] = []
    for row_number, record in enumerate(table.rows, 1):
        try:
            timestamp = parse_timestamp(record[0], time_format)
        except SluiceTimeParseError as error:
            diagnostics.append(_skip_row(row_number, record, error))
            continue
        cells: list[InterpretedCell] = []
        for column in range(1, len(record)):
            raw_value = record[column]
            if raw_value == "":
                continue
            if column in tag_columns:
                cells.append(InterpretedCell(column=column, tags=tuple(raw_value.split())))
                continue
            try:
                value = _parse_float(raw_value)
            except ValueError as error:
                diagnostics.append(_skip_field(row_number, column, raw_value, error))
                continue
            cells.append(InterpretedCell(column=column, value=value))
        rows.append(InterpretedRow(row_number=row_number, timestamp=timestamp, cells=tuple(cells)))
    return RowInterpretation(rows=tuple(rows), diagnostics=tuple(diagnostics))


def _parse_float(raw_value: str) -> float:
    """Parse a numeric cell, rejecting padding and digit separators."""
    if "_" in raw_value or raw_value != raw_value.strip():
        raise ValueError(f"invalid float literal: '{raw_value}'")
    return float(raw_value)


def _skip_row(row_number: int, record: Sequence[str], error: Exception) -> RowDiagnostic:
    raw_value = ",".join(record)
    _LOGGER.warning("invalid_row_skipped", row_number=row_number, record=raw_value, error=str(error))
    return RowDiagnostic(
        kind=DIAGNOSTIC_INVALID_TIMESTAMP,
        row_number=row_number,
        column=None,
        raw_value=raw_value,
        message=str(error),
    )


def _skip_field(row_number: int, column: int, raw_value: str, error: Exception) -> RowDiagnostic:
    _LOGGER.warning(
        "invalid_field_skipped",
        row_number=row_number,
        column=column,
        value=raw_value,
        error=str(error),
    )
    return RowDiagnostic(
        kind=DIAGNOSTIC_INVALID_FIELD,
        row_number=row_number,
        column=column,
        raw_value=raw_value,
        message=str(error),
    )
