"""Tanimoto similarity over circular fingerprints."""

import logging
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from ..interfaces.similarity_calculator import SimilarityCalculator
from ..models.fingerprint import Fingerprint, fingerprint_to_array, serialize_fingerprint
from ..models.molecular_graph import MolecularGraph
from ..models.search_config import check_threshold
from ..models.similarity_result import MoleculeRecord, SimilarMolecule
from .circular_fingerprint import CircularFingerprintGenerator

logger = logging.getLogger(__name__)


def tanimoto(fingerprint1: Iterable[int], fingerprint2: Iterable[int]) -> float:
    """|A & B| / |A | B|; two empty sets are identical, one empty set shares nothing."""
    set1 = set(fingerprint1)
    set2 = set(fingerprint2)

    if not set1 and not set2:
        return 1.0
    if not set1 or not set2:
        return 0.0

    intersection = len(set1 & set2)
    union = len(set1) + len(set2) - intersection
    return intersection / union


def tanimoto_upper_bound(count1: int, count2: int) -> float:
    """Largest Tanimoto two sets of the given sizes can reach."""
    if count1 == 0 and count2 == 0:
        return 1.0
    return min(count1, count2) / max(count1, count2)


def bulk_tanimoto(query: Iterable[int], fingerprints: Sequence[Iterable[int]]) -> np.ndarray:
    """
    Tanimoto of one fingerprint against many, using dense bit vectors.

    Args:
        query: Query bit set
        fingerprints: Candidate bit sets

    Returns:
        float64 array with one coefficient per candidate
    """
    if len(fingerprints) == 0:
        return np.zeros(0, dtype=np.float64)

    q = fingerprint_to_array(query).astype(np.int32)
    M = np.vstack([fingerprint_to_array(fp) for fp in fingerprints]).astype(np.int32)

    intersection = M @ q
    union = q.sum() + M.sum(axis=1) - intersection

    scores = np.ones(len(fingerprints), dtype=np.float64)
    nonzero = union > 0
    scores[nonzero] = intersection[nonzero] / union[nonzero]
    return scores


class TanimotoCalculator(SimilarityCalculator):
    """Similarity calculator using circular fingerprints and the Tanimoto coefficient."""

    def __init__(self, generator: Optional[CircularFingerprintGenerator] = None):
        self.generator = generator or CircularFingerprintGenerator()

    def generate_fingerprint(self, source: Union[str, MolecularGraph]) -> Fingerprint:
        return self.generator.generate(source)

    def calculate(self, fingerprint1: Iterable[int], fingerprint2: Iterable[int]) -> float:
        return tanimoto(fingerprint1, fingerprint2)

    def calculate_smiles(self, smiles1: str, smiles2: str) -> float:
        """Similarity of two SMILES strings; blank input on either side gives 0.0."""
        if not smiles1 or not smiles1.strip() or not smiles2 or not smiles2.strip():
            return 0.0
        return self.calculate(
            self.generate_fingerprint(smiles1), self.generate_fingerprint(smiles2)
        )

    def build_record(self, identifier: str, smiles: str, name: str = "") -> MoleculeRecord:
        """Candidate record with its fingerprint precomputed."""
        bits = self.generate_fingerprint(smiles)
        return MoleculeRecord(
            identifier=identifier,
            smiles=smiles,
            name=name,
            fingerprint_bits=serialize_fingerprint(bits),
            fingerprint_bit_count=len(bits),
        )

    def candidate_fingerprint(self, record: MoleculeRecord) -> Fingerprint:
        """Stored fingerprint when present, otherwise computed from the SMILES."""
        if record.has_fingerprint:
            return record.fingerprint()
        return self.generate_fingerprint(record.smiles)

    def score(
        self, query_bits: Fingerprint, record: MoleculeRecord, threshold: float
    ) -> Optional[SimilarMolecule]:
        """Match for ``record`` if it reaches ``threshold``, else None."""
        if record.fingerprint_bit_count is not None:
            bound = tanimoto_upper_bound(len(query_bits), record.fingerprint_bit_count)
            if bound < threshold:
                return None

        coefficient = self.calculate(query_bits, self.candidate_fingerprint(record))
        if coefficient < threshold:
            return None
        return SimilarMolecule(record=record, tanimoto_coefficient=coefficient)

    def find_similar(
        self,
        query_smiles: str,
        candidates: Iterable[Union[MoleculeRecord, str]],
        threshold: float,
    ) -> List[SimilarMolecule]:
        """
        Rank candidates by similarity to the query.

        Args:
            query_smiles: Query molecule
            candidates: Records or bare SMILES strings
            threshold: Minimum coefficient in [0, 1]

        Returns:
            Matches sorted by descending coefficient; ties keep input order

        Raises:
            ValueError: If threshold is outside [0, 1]
        """
        check_threshold(threshold)
        if not query_smiles or not query_smiles.strip():
            return []

        query_bits = self.generate_fingerprint(query_smiles)
        matches = []
        for candidate in candidates:
            record = as_record(candidate)
            match = self.score(query_bits, record, threshold)
            if match is not None:
                matches.append(match)

        matches.sort(key=lambda m: m.tanimoto_coefficient, reverse=True)
        logger.debug(f"{len(matches)} candidates reached threshold {threshold}")
        return matches


def as_record(candidate: Union[MoleculeRecord, str]) -> MoleculeRecord:
    """Wrap a bare SMILES string as a record identified by its own text."""
    if isinstance(candidate, MoleculeRecord):
        return candidate
    return MoleculeRecord(identifier=candidate, smiles=candidate)
