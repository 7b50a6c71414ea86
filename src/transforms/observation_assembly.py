"""Flat observation assembly.

This module turns interpreted rows into one chronological observation
stream keyed by raw header names, ignoring any path structure.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.types import InterpretedRow, Observation


def assemble_observations(
    headers: Sequence[str],
    rows: Iterable[InterpretedRow],
) -> list[Observation]:
    """Build one observation per interpreted row.

    Args:
        headers: Full header row; data cells are keyed by ``headers[column]``.
        rows: Interpreted rows in input order.

    Returns:
        Observations in input row order.
    """
    observations: list[Observation] = []
    for row in rows:
        fields: dict[str, float] = {}
        tags: tuple[str, ...] = ()
        for cell in row.cells:
            if cell.is_tags:
                tags = cell.tags
                continue
            fields[headers[cell.column]] = cell.value
        observations.append(Observation(timestamp=row.timestamp, fields=fields, tags=tags))
    return observations
