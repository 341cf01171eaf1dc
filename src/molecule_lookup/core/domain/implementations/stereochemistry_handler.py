"""Validation rule for chiral centers and stereo bonds."""

from typing import List, Set

from ..interfaces.validation_handler import ValidationHandler
from ..models.atom import Atom
from ..models.bond import BondStereo, BondType
from ..models.molecular_graph import MolecularGraph
from ..models.validation_result import ValidationFailureReason, ValidationResult

STEREOGENIC_ELEMENTS = {"C", "N", "S", "P"}
VALID_CONFIGURATIONS = {"R", "S"}
SIGNATURE_DEPTH = 2


def substituent_signature(
    molecule: MolecularGraph, atom: Atom, exclude_atom_id: int, depth: int
) -> str:
    """
    Describe the substituent rooted at ``atom`` as seen from ``exclude_atom_id``.

    The description is the element symbol followed by the sorted signatures
    of the neighbours one shell further out, ``depth`` shells deep.
    """
    if depth == 0:
        return atom.symbol

    neighbour_signatures = sorted(
        substituent_signature(molecule, neighbour, atom.atom_id, depth - 1)
        for neighbour in molecule.get_connected_atoms(atom.atom_id)
        if neighbour.atom_id != exclude_atom_id
    )
    return f"{atom.symbol}({','.join(neighbour_signatures)})"


def has_four_different_substituents(molecule: MolecularGraph, center: Atom) -> bool:
    substituents = [
        substituent_signature(molecule, neighbour, center.atom_id, SIGNATURE_DEPTH)
        for neighbour in molecule.get_connected_atoms(center.atom_id)
    ]
    substituents.extend("H" for _ in range(center.implicit_hydrogens))
    return len(set(substituents)) == len(substituents)


def find_potential_chiral_centers(molecule: MolecularGraph) -> List[int]:
    """Ids of tetrahedral C/N/S/P atoms carrying four distinct substituents."""
    centers = []

    for atom in molecule.atoms:
        if atom.symbol.upper() not in STEREOGENIC_ELEMENTS:
            continue

        bonds = molecule.get_bonds_for_atom(atom.atom_id)
        if len(bonds) + atom.implicit_hydrogens != 4:
            continue

        if any(b.bond_type in (BondType.DOUBLE, BondType.TRIPLE) for b in bonds):
            continue

        if has_four_different_substituents(molecule, atom):
            centers.append(atom.atom_id)

    return centers


def find_potential_ez_bonds(molecule: MolecularGraph) -> List[int]:
    """Ids of double bonds that may show E/Z isomerism."""
    ez_bonds = []

    for bond in molecule.bonds:
        if bond.bond_type is not BondType.DOUBLE:
            continue

        if (
            len(molecule.get_bonds_for_atom(bond.atom1_id)) < 2
            or len(molecule.get_bonds_for_atom(bond.atom2_id)) < 2
        ):
            continue

        ends_distinct = []
        for end, partner in (
            (bond.atom1_id, bond.atom2_id),
            (bond.atom2_id, bond.atom1_id),
        ):
            symbols = [
                a.symbol
                for a in molecule.get_connected_atoms(end)
                if a.atom_id != partner
            ]
            ends_distinct.append(len(set(symbols)) == len(symbols))

        if any(ends_distinct):
            ez_bonds.append(bond.bond_id)

    return ez_bonds


class StereochemistryHandler(ValidationHandler):
    """Checks declared chiral centers and stereo bonds.

    Only declared chirality can fail validation. Undeclared stereocenters,
    possible E/Z double bonds and wedge/dash bonds away from any declared
    center are reported as warnings.
    """

    @property
    def handler_name(self) -> str:
        return "Stereochemistry Validator"

    def validate(self, molecule: MolecularGraph) -> ValidationResult:
        result = ValidationResult.success()

        potential_centers = find_potential_chiral_centers(molecule)
        potential_set: Set[int] = set(potential_centers)

        for atom in molecule.get_chiral_centers():
            if atom.atom_id not in potential_set:
                result.add_error(
                    ValidationFailureReason.INVALID_STEREOCHEMISTRY,
                    f"Atom {atom.symbol} (ID: {atom.atom_id}) is marked as a chiral center "
                    "but does not have four different substituents. "
                    "A chiral center requires a tetrahedral atom with four distinct groups.",
                    atom.atom_id,
                )

            if atom.chiral_configuration and atom.chiral_configuration not in VALID_CONFIGURATIONS:
                result.add_error(
                    ValidationFailureReason.INVALID_STEREOCHEMISTRY,
                    f"Atom {atom.symbol} (ID: {atom.atom_id}) has invalid chiral configuration "
                    f"'{atom.chiral_configuration}'. Must be 'R' or 'S'.",
                    atom.atom_id,
                )

        unmarked = [
            atom_id
            for atom_id in potential_centers
            if not molecule.get_atom(atom_id).is_chiral_center
        ]
        if unmarked:
            result.add_warning(
                f"Potential chiral center(s) detected at atom ID(s): "
                f"{', '.join(map(str, unmarked))}. "
                "Consider specifying R/S configuration for stereochemically accurate searches."
            )

        ez_bonds = find_potential_ez_bonds(molecule)
        if ez_bonds:
            result.add_warning(
                f"Molecule contains {len(ez_bonds)} double bond(s) that may have E/Z isomerism. "
                "Ensure correct geometric configuration is specified if stereochemistry is important."
            )

        self._check_stereo_bonds(molecule, result)

        return result

    @staticmethod
    def _check_stereo_bonds(molecule: MolecularGraph, result: ValidationResult) -> None:
        """Warn about wedge/dash bonds that touch no declared chiral center."""
        for bond in molecule.bonds:
            if bond.stereo not in (BondStereo.UP, BondStereo.DOWN):
                continue
            atom1 = molecule.get_atom(bond.atom1_id)
            atom2 = molecule.get_atom(bond.atom2_id)
            if not atom1.is_chiral_center and not atom2.is_chiral_center:
                result.add_warning(
                    f"Stereo bond (ID: {bond.bond_id}) is not connected to a designated "
                    "chiral center. This may result in undefined stereochemistry.",
                    bond.atom1_id,
                )
