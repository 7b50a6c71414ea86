"""Path-partitioned state assembly.

This module groups interpreted rows by entity path. Each path keeps a
fixed field schema, a cumulative tag vocabulary, and its observations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from core.constants import TAGS_FIELD_NAME
from core.types import ColumnTarget, InterpretedRow, Observation, State


@dataclass
class _PathAccumulator:
    """Mutable per-path state while rows are routed."""

    field_names: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    observations: list[Observation] = field(default_factory=list)

    def to_state(self, path: str) -> State:
        return State(
            path=path,
            field_names=tuple(self.field_names),
            tags=tuple(sorted(self.tags)),
            observations=tuple(self.observations),
        )


def partition_states(
    targets: Sequence[ColumnTarget],
    rows: Iterable[InterpretedRow],
) -> list[State]:
    """Group interpreted rows into one state per entity path.

    A row adds an observation to a path only when it holds at least one
    numeric value for that path. Tags are folded into the path vocabulary
    even when the row adds no observation.

    Args:
        targets: Resolved columns indexed by ``column - 1``.
        rows: Interpreted rows in input order.

    Returns:
        States in first-seen path order.
    """
    accumulators = _seed_accumulators(targets)
    for row in rows:
        row_fields: dict[str, dict[str, float]] = {}
        row_tags: dict[str, tuple[str, ...]] = {}
        for cell in row.cells:
            target = targets[cell.column - 1]
            if cell.is_tags:
                row_tags[target.path] = cell.tags
                accumulators[target.path].tags.update(cell.tags)
                continue
            row_fields.setdefault(target.path, {})[target.field_name] = cell.value
        for path, fields in row_fields.items():
            observation = Observation(
                timestamp=row.timestamp,
                fields=fields,
                tags=row_tags.get(path, ()),
            )
            accumulators[path].observations.append(observation)
    return [accumulator.to_state(path) for path, accumulator in accumulators.items()]


def _seed_accumulators(targets: Sequence[ColumnTarget]) -> dict[str, _PathAccumulator]:
    """Create accumulators with each path's field schema."""
    accumulators: dict[str, _PathAccumulator] = {}
    for target in targets:
        accumulator = accumulators.setdefault(target.path, _PathAccumulator())
        if target.field_name != TAGS_FIELD_NAME:
            accumulator.field_names.append(target.field_name)
    return accumulators
