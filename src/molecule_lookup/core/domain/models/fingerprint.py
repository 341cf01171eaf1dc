"""Fingerprint bit sets and their persisted text form."""

from typing import FrozenSet, Iterable

import numpy as np

FINGERPRINT_SIZE = 2048
FINGERPRINT_RADIUS = 2

Fingerprint = FrozenSet[int]


def serialize_fingerprint(bits: Iterable[int]) -> str:
    """Ascending bit positions joined by commas; empty set gives ""."""
    return ",".join(str(bit) for bit in sorted(set(bits)))


def parse_fingerprint_bits(serialized: str) -> Fingerprint:
    """
    Parse the comma-joined form produced by ``serialize_fingerprint``.

    Args:
        serialized: Comma separated bit positions, may be empty

    Returns:
        Frozen set of bit positions

    Raises:
        ValueError: If an entry is not an integer in [0, FINGERPRINT_SIZE)
    """
    if not serialized or not serialized.strip():
        return frozenset()

    bits = set()
    for part in serialized.split(","):
        part = part.strip()
        if not part:
            continue
        bit = int(part)
        if not 0 <= bit < FINGERPRINT_SIZE:
            raise ValueError(
                f"Fingerprint bit {bit} outside [0, {FINGERPRINT_SIZE})"
            )
        bits.add(bit)
    return frozenset(bits)


def fingerprint_to_array(bits: Iterable[int]) -> np.ndarray:
    """Dense uint8 vector of width FINGERPRINT_SIZE with the given bits set."""
    vector = np.zeros(FINGERPRINT_SIZE, dtype=np.uint8)
    indices = np.fromiter(bits, dtype=np.int64)
    if indices.size:
        vector[indices] = 1
    return vector
