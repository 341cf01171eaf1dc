"""Core business logic services."""

from .validation_service import MoleculeValidator
from .similarity_service import SimilarityService

__all__ = [
    "MoleculeValidator",
    "SimilarityService",
]
