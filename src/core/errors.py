"""Sluice exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Structural failures abort a call; row faults never leave the interpreter.
"""

from __future__ import annotations


class SluiceError(Exception):
    """Base exception for all Sluice failures."""


class SluiceConfigError(SluiceError):
    """Raised for invalid processor options or unknown processor names."""


class SluiceDependencyError(SluiceError):
    """Raised when an optional runtime dependency is missing."""


class SluiceParseError(SluiceError):
    """Raised when a payload has no usable tabular structure."""


class SluiceSchemaError(SluiceError):
    """Raised when headers cannot be resolved into path and field names."""


class SluiceValidationError(SluiceError):
    """Raised when headers fall outside a caller-supplied allow-list."""


class SluiceHashingError(SluiceError):
    """Raised when a payload fingerprint cannot be computed."""


class SluiceTimeParseError(SluiceError):
    """Raised when a timestamp cell cannot be converted to Unix seconds."""
