"""Interface for structural validation rules."""

from abc import ABC, abstractmethod
from ..models.molecular_graph import MolecularGraph
from ..models.validation_result import ValidationResult


class ValidationHandler(ABC):
    """Abstract base class for one rule in the validation sequence.

    A handler inspects the whole molecule and returns its own partial result.
    A result carrying an error stops the sequence; warnings are collected.
    """

    @property
    @abstractmethod
    def handler_name(self) -> str:
        """Name used in log output."""
        pass

    @abstractmethod
    def validate(self, molecule: MolecularGraph) -> ValidationResult:
        """
        Check one aspect of the molecule.

        Args:
            molecule: Structure to check, never mutated

        Returns:
            ValidationResult with this handler's errors and warnings
        """
        pass
