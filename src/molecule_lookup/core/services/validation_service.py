# src/molecule_lookup/core/services/validation_service.py
"""Service running molecules through an ordered list of validation handlers."""

import logging
from typing import List, Optional, Sequence

from ..domain.implementations.bonding_rules_handler import BondingRulesHandler
from ..domain.implementations.charge_balance_handler import ChargeBalanceHandler
from ..domain.implementations.stereochemistry_handler import StereochemistryHandler
from ..domain.interfaces.validation_handler import ValidationHandler
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.validation_result import ValidationFailureReason, ValidationResult
from ..utils.benchmarking import PerformanceStats, Timer, timer

logger = logging.getLogger(__name__)


class MoleculeValidator:
    """Validates molecule structures with a fixed sequence of handlers.

    Handlers run in order: charges, then bonding, then stereochemistry for
    the default set. The first handler reporting an error ends the run.
    Warnings from every handler that ran are kept on the returned result.
    """

    def __init__(self, handlers: Sequence[ValidationHandler]):
        if not handlers:
            raise ValueError("At least one handler must be provided")
        self.handlers: List[ValidationHandler] = list(handlers)
        self.stats = PerformanceStats()

    @classmethod
    def create_default(cls) -> "MoleculeValidator":
        return cls(
            [ChargeBalanceHandler(), BondingRulesHandler(), StereochemistryHandler()]
        )

    @classmethod
    def create_with_handlers(cls, *handlers: ValidationHandler) -> "MoleculeValidator":
        """
        Build a validator from the given handlers, run in argument order.

        Raises:
            ValueError: If no handler is given
        """
        return cls(handlers)

    def validate(self, molecule: Optional[MolecularGraph]) -> ValidationResult:
        """
        Validate a molecule structure.

        Args:
            molecule: Structure to check, may be None

        Returns:
            ValidationResult with the first failing handler's errors, or
            success, carrying the warnings of every handler that ran
        """
        if molecule is None:
            return ValidationResult.failure(
                ValidationFailureReason.EMPTY_STRUCTURE,
                "Cannot validate a null molecule",
            )

        collected = ValidationResult.success()

        with Timer("validation") as run_timer:
            for handler in self.handlers:
                with timer(handler.handler_name, self.stats, items=1):
                    result = handler.validate(molecule)

                if not result.is_valid:
                    logger.debug(
                        f"{handler.handler_name} failed: {result.failure_reason.value}"
                    )
                    result.warnings = collected.warnings + result.warnings
                    return result

                logger.debug(
                    f"{handler.handler_name} passed with {len(result.warnings)} warning(s)"
                )
                collected.merge_warnings(result)

        logger.debug(
            f"Validated {len(molecule)} atoms in {run_timer.elapsed_ms():.2f} ms"
        )
        return collected
