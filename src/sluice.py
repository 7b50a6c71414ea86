"""Public SDK surface for Sluice.

This module provides a stable import path for host integrations.
It re-exports the processor, extraction functions, and typed models.
"""

from __future__ import annotations

from core.config import ProcessorConfig
from core.errors import (
    SluiceConfigError,
    SluiceError,
    SluiceHashingError,
    SluiceParseError,
    SluiceSchemaError,
    SluiceValidationError,
)
from core.types import (
    Observation,
    ObservationExtraction,
    RowDiagnostic,
    State,
    StateExtraction,
)
from ingest.csv_processor import CsvProcessor
from ingest.extraction import extract_observations, extract_states
from ingest.processor_registry import create_data_processor, supported_data_processors

__all__ = [
    "CsvProcessor",
    "Observation",
    "ObservationExtraction",
    "ProcessorConfig",
    "RowDiagnostic",
    "SluiceConfigError",
    "SluiceError",
    "SluiceHashingError",
    "SluiceParseError",
    "SluiceSchemaError",
    "SluiceValidationError",
    "State",
    "StateExtraction",
    "create_data_processor",
    "extract_observations",
    "extract_states",
    "supported_data_processors",
]
