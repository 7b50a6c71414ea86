"""Core constants used across Sluice modules.

This module centralizes reserved column names and parsing defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

CSV_PROCESSOR_NAME = "csv"
TIMESTAMP_COLUMN_NAME = "time"
TAGS_FIELD_NAME = "_tags"
PATH_SEPARATOR = "."
HASH_ALGORITHM = "sha256"
PAYLOAD_ENCODING = "utf-8-sig"
TIME_FORMAT_PARAM = "time_format"
TIME_FORMAT_ENV_VAR = "SLUICE_TIME_FORMAT"
DIAGNOSTIC_INVALID_TIMESTAMP = "invalid_timestamp"
DIAGNOSTIC_INVALID_FIELD = "invalid_field"
