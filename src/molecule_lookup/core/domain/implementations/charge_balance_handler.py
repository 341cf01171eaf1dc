"""Validation rule for formal charges."""

from typing import Dict, Tuple

from ..interfaces.validation_handler import ValidationHandler
from ..models.atom import Atom
from ..models.molecular_graph import MolecularGraph
from ..models.validation_result import ValidationFailureReason, ValidationResult

MAX_ABSOLUTE_TOTAL_CHARGE = 4

# Acceptable (min, max) formal charge per element, keyed by upper-case symbol.
CHARGE_RANGES: Dict[str, Tuple[int, int]] = {
    "H": (-1, 1),
    "C": (-1, 1),
    "N": (-1, 1),
    "O": (-1, 0),
    "S": (-1, 2),
    "P": (-1, 1),
    "F": (-1, 0),
    "CL": (-1, 0),
    "BR": (-1, 0),
    "I": (-1, 0),
}

DEFAULT_CHARGE_RANGE = (-2, 2)


def is_valid_atom_charge(atom: Atom) -> bool:
    low, high = CHARGE_RANGES.get(atom.symbol.upper(), DEFAULT_CHARGE_RANGE)
    return low <= atom.formal_charge <= high


class ChargeBalanceHandler(ValidationHandler):
    """Checks that formal charges give a chemically reasonable molecule.

    Empty structures and totals beyond +/-4 fail outright. Individual atoms
    with charges outside their element's range are recorded as errors, and
    any nonzero net charge is reported as a warning.
    """

    @property
    def handler_name(self) -> str:
        return "Charge Balance Validator"

    def validate(self, molecule: MolecularGraph) -> ValidationResult:
        if molecule.is_empty():
            return ValidationResult.failure(
                ValidationFailureReason.EMPTY_STRUCTURE,
                "Cannot validate an empty molecule structure",
            )

        total_charge = molecule.total_charge
        if abs(total_charge) > MAX_ABSOLUTE_TOTAL_CHARGE:
            return ValidationResult.failure(
                ValidationFailureReason.CHARGE_IMBALANCE,
                f"Total molecular charge ({total_charge}) exceeds reasonable bounds "
                f"(+/-{MAX_ABSOLUTE_TOTAL_CHARGE}). "
                "Please verify the formal charges on your atoms.",
            )

        result = ValidationResult.success()

        for atom in molecule.atoms:
            if not is_valid_atom_charge(atom):
                result.add_error(
                    ValidationFailureReason.CHARGE_IMBALANCE,
                    f"Atom {atom.symbol} (ID: {atom.atom_id}) has an unusual "
                    f"formal charge of {atom.formal_charge}",
                    atom.atom_id,
                )

        if total_charge != 0:
            result.add_warning(
                f"Molecule has a net charge of {total_charge:+d}. "
                "Ensure this is intentional for ionic species."
            )

        return result
