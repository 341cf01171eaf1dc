"""Interfaces implemented by the core strategies."""

from .smiles_converter import SmilesConverter
from .validation_handler import ValidationHandler
from .similarity_calculator import SimilarityCalculator

__all__ = [
    "SmilesConverter",
    "ValidationHandler",
    "SimilarityCalculator",
]
