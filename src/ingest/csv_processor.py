"""Stateful CSV data processor.

This module holds the latest accepted payload for a host that delivers
data and extracts it on separate schedules. One lock guards the buffer;
extraction consumes the buffer so each payload is emitted once.
"""

from __future__ import annotations

import threading
from typing import Iterable, Mapping

from core.config import ProcessorConfig
from core.logging_config import get_logger
from core.types import ObservationExtraction, StateExtraction
from ingest.change_detection import compute_new_hash
from ingest.extraction import extract_observations, extract_states

_LOGGER = get_logger(__name__)


class CsvProcessor:
    """Thread-safe processor turning CSV payloads into observations or states."""

    def __init__(self, config: ProcessorConfig | None = None) -> None:
        self._config = config or ProcessorConfig()
        self._lock = threading.Lock()
        self._data: bytes | None = None
        self._data_hash: str | None = None

    @property
    def config(self) -> ProcessorConfig:
        return self._config

    @property
    def fingerprint(self) -> str | None:
        """Fingerprint of the last accepted payload."""
        with self._lock:
            return self._data_hash

    @property
    def has_pending_data(self) -> bool:
        """Whether an accepted payload is waiting to be extracted."""
        with self._lock:
            return self._data is not None

    def init(self, params: Mapping[str, object] | None) -> None:
        """Apply host options; only ``time_format`` is recognized.

        Raises:
            SluiceConfigError: If ``time_format`` is not a string.
        """
        config = ProcessorConfig.from_params(params)
        with self._lock:
            self._config = config

    def on_data(self, data: bytes) -> bytes:
        """Accept a payload when it differs from the last accepted one.

        Args:
            data: Raw CSV bytes from a connector.

        Returns:
            The input payload, unchanged.

        Raises:
            SluiceHashingError: If the payload cannot be fingerprinted.
        """
        with self._lock:
            new_hash = compute_new_hash(self._data, self._data_hash, data)
            if new_hash is None:
                _LOGGER.debug("payload_unchanged", fingerprint=self._data_hash)
                return data
            self._data = data
            self._data_hash = new_hash
            _LOGGER.debug("payload_accepted", fingerprint=new_hash, size_bytes=len(data))
        return data

    def get_observations(self) -> ObservationExtraction | None:
        """Extract and consume the pending payload as flat observations.

        Returns:
            Extraction result, or ``None`` when nothing new is pending.

        Raises:
            SluiceParseError: If the pending payload is structurally invalid.
        """
        with self._lock:
            if self._data is None:
                return None
            result = extract_observations(self._data, self._config)
            self._data = None
            return result

    def get_state(self, valid_fields: Iterable[str] | None = None) -> StateExtraction | None:
        """Extract and consume the pending payload as per-path states.

        Args:
            valid_fields: Optional allow-list of full header names.

        Returns:
            Extraction result, or ``None`` when nothing new is pending.

        Raises:
            SluiceParseError: If the pending payload is structurally invalid.
            SluiceValidationError: If a header is not in ``valid_fields``.
            SluiceSchemaError: If a header is not fully qualified.
        """
        with self._lock:
            if self._data is None:
                return None
            result = extract_states(self._data, self._config, valid_fields)
            self._data = None
            return result
