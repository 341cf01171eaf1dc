"""Domain model for structural validation results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


class ValidationFailureReason(Enum):
    """Reasons why a molecule validation might fail."""

    NONE = "None"
    CHARGE_IMBALANCE = "ChargeImbalance"
    INVALID_BONDING_RULES = "InvalidBondingRules"
    INVALID_STEREOCHEMISTRY = "InvalidStereochemistry"
    EMPTY_STRUCTURE = "EmptyStructure"
    INVALID_ATOM = "InvalidAtom"
    UNKNOWN_ERROR = "UnknownError"


@dataclass
class ValidationError:
    """A problem that makes the structure invalid."""

    reason: ValidationFailureReason
    message: str
    atom_id: Optional[int] = None


@dataclass
class ValidationWarning:
    """An advisory note that does not affect validity."""

    message: str
    atom_id: Optional[int] = None


@dataclass
class ValidationResult:
    """Contains the outcome of running a molecule through validation handlers."""

    is_valid: bool = True
    failure_reason: ValidationFailureReason = ValidationFailureReason.NONE
    error_message: Optional[str] = None
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)
    validated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, reason: ValidationFailureReason, message: str) -> "ValidationResult":
        """Create a terminal failure carrying a single error."""
        result = cls()
        result.add_error(reason, message)
        return result

    def add_error(
        self,
        reason: ValidationFailureReason,
        message: str,
        atom_id: Optional[int] = None,
    ) -> None:
        """
        Record an error. The first error decides the failure reason.

        Args:
            reason: Failure category
            message: Human-readable description
            atom_id: Atom the error refers to, if any
        """
        self.is_valid = False
        if self.failure_reason is ValidationFailureReason.NONE:
            self.failure_reason = reason
        if self.error_message is None:
            self.error_message = message
        self.errors.append(ValidationError(reason, message, atom_id))

    def add_warning(self, message: str, atom_id: Optional[int] = None) -> None:
        self.warnings.append(ValidationWarning(message, atom_id))

    def merge_warnings(self, other: "ValidationResult") -> None:
        """Append warnings collected by another result, keeping their order."""
        self.warnings.extend(other.warnings)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
