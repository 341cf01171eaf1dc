"""Core domain and services for SMILES handling, validation and similarity."""

from .domain.models.molecular_graph import MolecularGraph
from .services.validation_service import MoleculeValidator
from .services.similarity_service import SimilarityService

__all__ = [
    "MolecularGraph",
    "MoleculeValidator",
    "SimilarityService",
]
