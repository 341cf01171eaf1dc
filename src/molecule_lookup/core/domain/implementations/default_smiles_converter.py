"""SMILES converter combining the parser and the serializer."""

from typing import Optional

from ..interfaces.smiles_converter import SmilesConverter
from ..models.molecular_graph import MolecularGraph
from .smiles_parser import SmilesParser
from .smiles_serializer import SmilesSerializer, is_valid_syntax


class DefaultSmilesConverter(SmilesConverter):
    """Converter backed by SmilesParser and SmilesSerializer."""

    def __init__(
        self,
        parser: Optional[SmilesParser] = None,
        serializer: Optional[SmilesSerializer] = None,
    ):
        self._parser = parser or SmilesParser()
        self._serializer = serializer or SmilesSerializer()

    def to_smiles(self, molecule: MolecularGraph) -> str:
        return self._serializer.serialize(molecule)

    def from_smiles(self, smiles: str) -> MolecularGraph:
        return self._parser.parse(smiles)

    def is_valid_smiles(self, smiles: str) -> bool:
        return is_valid_syntax(smiles)

    def normalize(self, smiles: str) -> str:
        """Parse and re-serialize, giving the traversal-order form of ``smiles``."""
        return self.to_smiles(self.from_smiles(smiles))
