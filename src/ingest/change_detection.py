"""Payload change detection.

This module fingerprints raw payloads so repeated deliveries of the
same bytes are not accepted as new data.
"""

from __future__ import annotations

import hashlib

from core.constants import HASH_ALGORITHM
from core.errors import SluiceHashingError


def compute_new_hash(
    previous_payload: bytes | None,
    previous_hash: str | None,
    new_payload: bytes,
) -> str | None:
    """Return a fingerprint for ``new_payload`` only when it is new data.

    Args:
        previous_payload: Last accepted payload, ``None`` once consumed.
        previous_hash: Fingerprint of the last accepted payload.
        new_payload: Incoming raw bytes.

    Returns:
        New hex digest, or ``None`` when the payload is unchanged.

    Raises:
        SluiceHashingError: If the payload cannot be hashed.
    """
    if previous_hash is not None and previous_payload is not None:
        if previous_payload == new_payload:
            return None
    new_hash = compute_payload_hash(new_payload)
    if new_hash == previous_hash:
        return None
    return new_hash


def compute_payload_hash(payload: bytes) -> str:
    """Hash a payload using the configured digest algorithm.

    Args:
        payload: Raw bytes.

    Returns:
        Hex digest string.

    Raises:
        SluiceHashingError: If the payload is not bytes-like or hashing fails.
    """
    try:
        hasher = hashlib.new(HASH_ALGORITHM)
        hasher.update(payload)
    except (TypeError, ValueError) as error:
        raise SluiceHashingError(
            f"Failed to fingerprint payload with {HASH_ALGORITHM}: {error}. "
            "Pass the raw payload as bytes."
        ) from error
    return hasher.hexdigest()
