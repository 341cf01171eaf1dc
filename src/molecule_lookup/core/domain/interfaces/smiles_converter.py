"""Interface for line-notation conversion."""

from abc import ABC, abstractmethod
from ..models.molecular_graph import MolecularGraph


class SmilesConverter(ABC):
    """Abstract base class for SMILES <-> molecular graph converters."""

    @abstractmethod
    def to_smiles(self, molecule: MolecularGraph) -> str:
        """
        Convert a molecular graph to SMILES text.

        Args:
            molecule: Structure to serialize

        Returns:
            SMILES string, empty for an empty molecule
        """
        pass

    @abstractmethod
    def from_smiles(self, smiles: str) -> MolecularGraph:
        """
        Parse SMILES text into a molecular graph.

        Args:
            smiles: SMILES string

        Returns:
            MolecularGraph, empty for blank input
        """
        pass

    @abstractmethod
    def is_valid_smiles(self, smiles: str) -> bool:
        """Check the text for allowed characters and balanced brackets."""
        pass
