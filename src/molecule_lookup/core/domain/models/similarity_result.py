"""Domain models for similarity search candidates and matches."""

from dataclasses import dataclass
from typing import Optional

from .fingerprint import Fingerprint, parse_fingerprint_bits


@dataclass
class MoleculeRecord:
    """Lightweight candidate record for similarity search.

    ``fingerprint_bits`` holds the persisted comma-joined form; the bit count
    is kept alongside it so candidates can be pre-filtered without parsing.
    """

    identifier: str
    smiles: str
    name: str = ""
    fingerprint_bits: str = ""
    fingerprint_bit_count: Optional[int] = None

    @property
    def has_fingerprint(self) -> bool:
        return bool(self.fingerprint_bits)

    def fingerprint(self) -> Fingerprint:
        return parse_fingerprint_bits(self.fingerprint_bits)


@dataclass
class SimilarMolecule:
    """A candidate that matched a query, with its Tanimoto coefficient."""

    record: MoleculeRecord
    tanimoto_coefficient: float
