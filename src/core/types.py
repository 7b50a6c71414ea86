"""Shared typed models.

This module defines immutable data models used by the reader,
interpreter, assemblers, and processor to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class ParsedTable:
    """Structurally valid CSV payload.

    Attributes:
        headers: Header row; column 0 is the timestamp column.
        rows: Data rows, each with exactly one cell per header.
    """

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class ColumnTarget:
    """Resolved destination of one fully-qualified data column.

    Attributes:
        path: Entity path, e.g. ``coinbase.btcusd``.
        field_name: Field name or the reserved tags marker.
    """

    path: str
    field_name: str


@dataclass(frozen=True)
class Observation:
    """Point-in-time observation.

    Attributes:
        timestamp: Unix seconds.
        fields: Numeric values keyed by field name.
        tags: Free-text labels attached to the row.
    """

    timestamp: int
    fields: Mapping[str, float] = field(default_factory=dict)
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class State:
    """Per-path time-series produced by grouped extraction.

    Attributes:
        path: Entity path shared by all fields.
        field_names: Field schema in first-seen column order.
        tags: Sorted, deduplicated tag vocabulary for the path.
        observations: Observations in input row order.
    """

    path: str
    field_names: tuple[str, ...]
    tags: tuple[str, ...]
    observations: tuple[Observation, ...]


@dataclass(frozen=True)
class RowDiagnostic:
    """Recovered row-level fault.

    Attributes:
        kind: ``invalid_timestamp`` or ``invalid_field``.
        row_number: One-based data row number (header excluded).
        column: Header index of the bad cell, ``None`` for a whole row.
        raw_value: Offending cell text.
        message: Human-readable reason.
    """

    kind: str
    row_number: int
    column: int | None
    raw_value: str
    message: str


@dataclass(frozen=True)
class InterpretedCell:
    """One non-empty cell after interpretation.

    Attributes:
        column: Header index of the cell.
        value: Parsed number, ``None`` for tag cells.
        tags: Tag tokens, empty for numeric cells.
    """

    column: int
    value: float | None = None
    tags: tuple[str, ...] = ()

    @property
    def is_tags(self) -> bool:
        """Return whether this cell came from a tags column."""
        return self.value is None


@dataclass(frozen=True)
class InterpretedRow:
    """Row with a valid timestamp and its usable cells."""

    row_number: int
    timestamp: int
    cells: tuple[InterpretedCell, ...]


@dataclass(frozen=True)
class RowInterpretation:
    """Interpreter output shared by both assemblers."""

    rows: tuple[InterpretedRow, ...]
    diagnostics: tuple[RowDiagnostic, ...]


@dataclass(frozen=True)
class ObservationExtraction:
    """Flat extraction result.

    Attributes:
        observations: Observations in input row order.
        diagnostics: Row faults skipped while parsing.
    """

    observations: tuple[Observation, ...]
    diagnostics: tuple[RowDiagnostic, ...] = ()


@dataclass(frozen=True)
class StateExtraction:
    """Grouped extraction result.

    Attributes:
        states: One state per distinct entity path.
        diagnostics: Row faults skipped while parsing.
    """

    states: tuple[State, ...]
    diagnostics: tuple[RowDiagnostic, ...] = ()

    def state_for(self, path: str) -> State | None:
        """Return the state for ``path`` when present."""
        for state in self.states:
            if state.path == path:
                return state
        return None
