"""Unit tests for the data processor registry."""

from __future__ import annotations

import pytest

from core.errors import SluiceConfigError
from ingest.csv_processor import CsvProcessor
from ingest.processor_registry import create_data_processor, supported_data_processors


def test_supported_data_processors_lists_csv() -> None:
    """Registry should expose the csv processor."""
    assert "csv" in supported_data_processors()


def test_create_data_processor_applies_params() -> None:
    """Created processors should be initialized with params."""
    processor = create_data_processor(" CSV ", {"time_format": "%Y"})

    assert isinstance(processor, CsvProcessor) and processor.config.time_format == "%Y"


def test_create_data_processor_raises_for_unknown_name() -> None:
    """Unknown processor names should raise a config error."""
    with pytest.raises(SluiceConfigError):
        create_data_processor("json")
