"""Core domain models, interfaces and implementations."""

from .exceptions import SmilesSyntaxError
from .models.molecular_graph import MolecularGraph
from .models.validation_result import ValidationResult

__all__ = [
    "SmilesSyntaxError",
    "MolecularGraph",
    "ValidationResult",
]
