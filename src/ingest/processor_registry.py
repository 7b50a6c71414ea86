"""Data processor registry.

This module maps processor names used in host configuration onto
processor factories.
"""

from __future__ import annotations

from typing import Callable, Mapping

from core.config import ProcessorConfig
from core.constants import CSV_PROCESSOR_NAME
from core.errors import SluiceConfigError
from ingest.csv_processor import CsvProcessor

_PROCESSOR_FACTORIES: dict[str, Callable[[ProcessorConfig], CsvProcessor]] = {
    CSV_PROCESSOR_NAME: CsvProcessor,
}


def supported_data_processors() -> tuple[str, ...]:
    """Return registered processor names in sorted order."""
    return tuple(sorted(_PROCESSOR_FACTORIES))


def create_data_processor(
    name: str,
    params: Mapping[str, object] | None = None,
) -> CsvProcessor:
    """Create and initialize a processor by name.

    Args:
        name: Processor name, e.g. ``csv``.
        params: Optional processor options.

    Returns:
        Initialized processor.

    Raises:
        SluiceConfigError: If the name is unknown or options are invalid.
    """
    normalized_name = name.lower().strip()
    factory = _PROCESSOR_FACTORIES.get(normalized_name)
    if factory is None:
        supported = ", ".join(supported_data_processors())
        raise SluiceConfigError(
            f"Unsupported data processor '{name}'. Choose one of: {supported}."
        )
    return factory(ProcessorConfig.from_params(params))
