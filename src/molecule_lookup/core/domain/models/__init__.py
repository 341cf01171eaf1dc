"""Domain model classes."""

from .atom import Atom
from .bond import Bond, BondStereo, BondType
from .molecular_graph import MolecularGraph
from .validation_result import (
    ValidationError,
    ValidationFailureReason,
    ValidationResult,
    ValidationWarning,
)
from .fingerprint import (
    FINGERPRINT_RADIUS,
    FINGERPRINT_SIZE,
    Fingerprint,
    fingerprint_to_array,
    parse_fingerprint_bits,
    serialize_fingerprint,
)
from .similarity_result import MoleculeRecord, SimilarMolecule
from .search_config import SimilaritySearchConfig

__all__ = [
    "Atom",
    "Bond",
    "BondStereo",
    "BondType",
    "MolecularGraph",
    "ValidationError",
    "ValidationFailureReason",
    "ValidationResult",
    "ValidationWarning",
    "FINGERPRINT_RADIUS",
    "FINGERPRINT_SIZE",
    "Fingerprint",
    "fingerprint_to_array",
    "parse_fingerprint_bits",
    "serialize_fingerprint",
    "MoleculeRecord",
    "SimilarMolecule",
    "SimilaritySearchConfig",
]
