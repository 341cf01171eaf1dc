"""SMILES parsing, structural validation and fingerprint similarity search."""

from typing import Iterable, List, Optional, Union

from .core.domain.exceptions import SmilesSyntaxError
from .core.domain.implementations.smiles_parser import SmilesParser
from .core.domain.implementations.smiles_serializer import SmilesSerializer, is_valid_syntax
from .core.domain.implementations.tanimoto_calculator import TanimotoCalculator
from .core.domain.models import (
    Atom,
    Bond,
    BondStereo,
    BondType,
    Fingerprint,
    MolecularGraph,
    MoleculeRecord,
    SimilarMolecule,
    SimilaritySearchConfig,
    ValidationFailureReason,
    ValidationResult,
    parse_fingerprint_bits,
    serialize_fingerprint,
)
from .core.services.similarity_service import SimilarityService
from .core.services.validation_service import MoleculeValidator

__version__ = "0.1.0"

_serializer = SmilesSerializer()
_calculator = TanimotoCalculator()


def parse(smiles: str, strict: bool = False) -> MolecularGraph:
    """Parse SMILES text into a molecular graph."""
    return SmilesParser(strict=strict).parse(smiles)


def serialize(molecule: MolecularGraph) -> str:
    """Write a molecular graph as SMILES text."""
    return _serializer.serialize(molecule)


def validate(molecule: Optional[MolecularGraph]) -> ValidationResult:
    """Run the default charge, bonding and stereochemistry checks."""
    return MoleculeValidator.create_default().validate(molecule)


def fingerprint(source: Union[str, MolecularGraph]) -> Fingerprint:
    return _calculator.generate_fingerprint(source)


def similarity(smiles1: str, smiles2: str) -> float:
    """Tanimoto coefficient of two SMILES strings."""
    return _calculator.calculate_smiles(smiles1, smiles2)


def find_similar(
    query_smiles: str,
    candidates: Iterable[Union[MoleculeRecord, str]],
    threshold: float = 0.8,
) -> List[SimilarMolecule]:
    """Candidates at or above ``threshold``, most similar first."""
    return _calculator.find_similar(query_smiles, candidates, threshold)


__all__ = [
    "parse",
    "serialize",
    "is_valid_syntax",
    "validate",
    "fingerprint",
    "similarity",
    "find_similar",
    "Atom",
    "Bond",
    "BondStereo",
    "BondType",
    "MolecularGraph",
    "MoleculeRecord",
    "SimilarMolecule",
    "SimilaritySearchConfig",
    "SimilarityService",
    "MoleculeValidator",
    "SmilesSyntaxError",
    "ValidationFailureReason",
    "ValidationResult",
    "parse_fingerprint_bits",
    "serialize_fingerprint",
]
