"""Stateless CSV extraction pipeline.

This module coordinates reading, resolving, interpreting, and shaping a
payload. Each call takes a payload and returns output without retaining
anything, so the functions are safe to share across threads.
"""

from __future__ import annotations

from typing import Iterable

from core.config import ProcessorConfig
from core.logging_config import get_logger
from core.types import ObservationExtraction, StateExtraction
from ingest.tabular_reader import read_table
from transforms.header_resolution import resolve_columns, validate_allowed_fields
from transforms.observation_assembly import assemble_observations
from transforms.row_interpretation import interpret_rows
from transforms.state_partitioning import partition_states

_LOGGER = get_logger(__name__)


def extract_observations(payload: bytes, config: ProcessorConfig) -> ObservationExtraction:
    """Extract a flat observation stream from a CSV payload.

    Args:
        payload: Raw CSV bytes.
        config: Processor configuration.

    Returns:
        Observations in row order plus row diagnostics.

    Raises:
        SluiceParseError: If the payload has no usable tabular structure.
    """
    table = read_table(payload)
    interpretation = interpret_rows(table, table.headers[1:], config.time_format)
    observations = assemble_observations(table.headers, interpretation.rows)
    _LOGGER.info(
        "observations_extracted",
        row_count=len(table.rows),
        observation_count=len(observations),
        diagnostic_count=len(interpretation.diagnostics),
    )
    return ObservationExtraction(
        observations=tuple(observations),
        diagnostics=interpretation.diagnostics,
    )


def extract_states(
    payload: bytes,
    config: ProcessorConfig,
    valid_fields: Iterable[str] | None = None,
) -> StateExtraction:
    """Extract per-path states from a CSV payload with qualified headers.

    Args:
        payload: Raw CSV bytes.
        config: Processor configuration.
        valid_fields: Optional allow-list of full header names.

    Returns:
        One state per entity path plus row diagnostics.

    Raises:
        SluiceParseError: If the payload has no usable tabular structure.
        SluiceValidationError: If a header is not in ``valid_fields``.
        SluiceSchemaError: If a header is not fully qualified.
    """
    table = read_table(payload)
    validate_allowed_fields(table.headers, valid_fields)
    targets = resolve_columns(table.headers)
    _LOGGER.debug("headers_resolved", headers=list(table.headers))
    field_names = [target.field_name for target in targets]
    interpretation = interpret_rows(table, field_names, config.time_format)
    states = partition_states(targets, interpretation.rows)
    _LOGGER.info(
        "states_extracted",
        row_count=len(table.rows),
        state_count=len(states),
        observation_count=sum(len(state.observations) for state in states),
        diagnostic_count=len(interpretation.diagnostics),
    )
    return StateExtraction(states=tuple(states), diagnostics=interpretation.diagnostics)
