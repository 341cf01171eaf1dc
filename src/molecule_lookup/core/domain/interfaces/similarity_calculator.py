"""Interface for fingerprint similarity calculators."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Union

from ..models.fingerprint import Fingerprint
from ..models.molecular_graph import MolecularGraph
from ..models.similarity_result import MoleculeRecord, SimilarMolecule


class SimilarityCalculator(ABC):
    """Abstract base class for fingerprint-based similarity strategies."""

    @abstractmethod
    def generate_fingerprint(self, source: Union[str, MolecularGraph]) -> Fingerprint:
        """Generate a fingerprint from SMILES text or a molecular graph."""
        pass

    @abstractmethod
    def calculate(self, fingerprint1: Iterable[int], fingerprint2: Iterable[int]) -> float:
        """
        Compare two fingerprints.

        Args:
            fingerprint1: First bit set
            fingerprint2: Second bit set

        Returns:
            Similarity coefficient in [0, 1]
        """
        pass

    @abstractmethod
    def find_similar(
        self,
        query_smiles: str,
        candidates: Iterable[Union[MoleculeRecord, str]],
        threshold: float,
    ) -> List[SimilarMolecule]:
        """Rank candidates at or above ``threshold``, most similar first."""
        pass
