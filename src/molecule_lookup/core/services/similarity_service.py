# src/molecule_lookup/core/services/similarity_service.py
"""Service for batched Tanimoto similarity scans."""

import logging
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence, Union

import numpy as np
from tqdm import tqdm

from ..domain.implementations.tanimoto_calculator import (
    TanimotoCalculator,
    as_record,
    bulk_tanimoto,
    tanimoto_upper_bound,
)
from ..domain.models.fingerprint import Fingerprint
from ..domain.models.search_config import SimilaritySearchConfig, check_threshold
from ..domain.models.similarity_result import MoleculeRecord, SimilarMolecule
from ..utils.benchmarking import Timer

logger = logging.getLogger(__name__)

Candidate = Union[MoleculeRecord, str]


def batched(items: Iterable, size: int) -> Iterator[list]:
    """Yield consecutive lists of at most ``size`` items."""
    iterator = iter(items)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch


class SimilarityService:
    """Scans candidate molecules for ones similar to a query."""

    def __init__(
        self,
        config: Optional[SimilaritySearchConfig] = None,
        calculator: Optional[TanimotoCalculator] = None,
    ):
        self.config = config or SimilaritySearchConfig()
        self.calculator = calculator or TanimotoCalculator()

    def find_similar(
        self,
        query_smiles: str,
        candidates: Iterable[Candidate],
        threshold: Optional[float] = None,
    ) -> List[SimilarMolecule]:
        """
        Find candidates at or above the similarity threshold.

        Args:
            query_smiles: Query molecule
            candidates: Records or bare SMILES strings
            threshold: Overrides the configured threshold

        Returns:
            At most ``max_results`` matches, most similar first
        """
        threshold = self._threshold(threshold)
        total = len(candidates) if hasattr(candidates, "__len__") else None

        matches: List[SimilarMolecule] = []
        with Timer("similarity scan") as scan_timer:
            with tqdm(
                total=total,
                desc="Scanning candidates",
                unit="mol",
                disable=not self.config.show_progress,
            ) as pbar:
                for batch_matches, batch_size in self._scan(query_smiles, candidates, threshold):
                    matches.extend(batch_matches)
                    pbar.update(batch_size)

        matches.sort(key=lambda m: m.tanimoto_coefficient, reverse=True)
        truncated = matches[: self.config.max_results]

        logger.info(
            f"Found {len(matches)} matches at threshold {threshold:.2f} "
            f"in {scan_timer.elapsed():.2f}s, returning {len(truncated)}"
        )
        return truncated

    def iter_matches(
        self,
        query_smiles: str,
        candidates: Iterable[Candidate],
        threshold: Optional[float] = None,
    ) -> Iterator[SimilarMolecule]:
        """Yield matches in candidate order as each batch is scored."""
        threshold = self._threshold(threshold)
        for batch_matches, _ in self._scan(query_smiles, candidates, threshold):
            yield from batch_matches

    def pairwise_similarity(self, smiles_list: Sequence[str]) -> np.ndarray:
        """
        Tanimoto matrix for a list of molecules.

        Args:
            smiles_list: Molecules to compare

        Returns:
            Symmetric (n, n) float64 array with ones on the diagonal
        """
        fingerprints = [self.calculator.generate_fingerprint(s) for s in smiles_list]
        n_molecules = len(fingerprints)
        matrix = np.ones((n_molecules, n_molecules), dtype=np.float64)

        for i in range(n_molecules):
            if i + 1 < n_molecules:
                row = bulk_tanimoto(fingerprints[i], fingerprints[i + 1 :])
                matrix[i, i + 1 :] = row
                matrix[i + 1 :, i] = row

        return matrix

    def _threshold(self, threshold: Optional[float]) -> float:
        if threshold is None:
            return self.config.threshold
        return check_threshold(threshold)

    def _scan(self, query_smiles: str, candidates: Iterable[Candidate], threshold: float):
        """Yield (matches, batch size) per batch of candidates."""
        if not query_smiles or not query_smiles.strip():
            return

        query_bits = self.calculator.generate_fingerprint(query_smiles)
        for batch in batched(candidates, self.config.batch_size):
            yield self._score_batch(query_bits, [as_record(c) for c in batch], threshold), len(batch)

    def _score_batch(
        self, query_bits: Fingerprint, records: List[MoleculeRecord], threshold: float
    ) -> List[SimilarMolecule]:
        survivors = [
            record
            for record in records
            if record.fingerprint_bit_count is None
            or tanimoto_upper_bound(len(query_bits), record.fingerprint_bit_count) >= threshold
        ]
        if not survivors:
            return []

        fingerprints = [self.calculator.candidate_fingerprint(r) for r in survivors]
        scores = bulk_tanimoto(query_bits, fingerprints)

        return [
            SimilarMolecule(record=record, tanimoto_coefficient=float(score))
            for record, score in zip(survivors, scores)
            if score >= threshold
        ]
