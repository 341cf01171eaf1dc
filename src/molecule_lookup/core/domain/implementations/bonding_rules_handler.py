"""Validation rule for valences and bond types."""

from typing import Dict, FrozenSet, List, Set

import networkx as nx

from ..interfaces.validation_handler import ValidationHandler
from ..models.atom import Atom
from ..models.bond import BondType
from ..models.molecular_graph import MolecularGraph
from ..models.validation_result import ValidationFailureReason, ValidationResult

# Common valences of neutral atoms, keyed by upper-case symbol.
BASE_VALENCES: Dict[str, FrozenSet[int]] = {
    "H": frozenset({1}),
    "C": frozenset({4}),
    "N": frozenset({3, 5}),
    "O": frozenset({2}),
    "S": frozenset({2, 4, 6}),
    "P": frozenset({3, 5}),
    "F": frozenset({1}),
    "CL": frozenset({1, 3, 5, 7}),
    "BR": frozenset({1, 3, 5}),
    "I": frozenset({1, 3, 5, 7}),
    "B": frozenset({3}),
    "SI": frozenset({4}),
}

DEFAULT_VALENCES = frozenset({4})

HALOGENS = {"F", "CL", "BR", "I"}


def expected_valences(symbol: str, charge: int) -> Set[int]:
    """
    Valences expected for an element at a given formal charge.

    Charged atoms accept the neutral valences shifted by ``-charge`` as well
    as the neutral valences themselves.
    """
    base = BASE_VALENCES.get(symbol.upper(), DEFAULT_VALENCES)
    if charge == 0:
        return set(base)
    return {v - charge for v in base} | set(base)


def has_disconnected_fragments(molecule: MolecularGraph) -> bool:
    """True when a breadth-first search from the first atom misses atoms."""
    if len(molecule.atoms) <= 1:
        return False

    G = molecule.to_networkx()
    reached = nx.bfs_tree(G, molecule.atoms[0].atom_id)
    return reached.number_of_nodes() != len(molecule.atoms)


class BondingRulesHandler(ValidationHandler):
    """Checks each atom's valence and the bond types it takes part in."""

    @property
    def handler_name(self) -> str:
        return "Bonding Rules Validator"

    def validate(self, molecule: MolecularGraph) -> ValidationResult:
        result = ValidationResult.success()

        for atom in molecule.atoms:
            valence = molecule.get_atom_valence(atom.atom_id)
            valences = expected_valences(atom.symbol, atom.formal_charge)

            if valence not in valences:
                max_valence = max(valences)
                if valence > max_valence:
                    result.add_error(
                        ValidationFailureReason.INVALID_BONDING_RULES,
                        f"Atom {atom.symbol} (ID: {atom.atom_id}) has valence {valence}, "
                        f"which exceeds maximum allowed valence of {max_valence}. "
                        "Please check the bond orders connected to this atom.",
                        atom.atom_id,
                    )
                else:
                    # Under-valent: missing hydrogens or an intended radical.
                    result.add_warning(
                        f"Atom {atom.symbol} (ID: {atom.atom_id}) has valence {valence}. "
                        f"Expected valences are: {', '.join(map(str, sorted(valences)))}. "
                        "This may indicate missing hydrogen atoms.",
                        atom.atom_id,
                    )

            for message in self._check_bond_types(molecule, atom):
                result.add_error(
                    ValidationFailureReason.INVALID_BONDING_RULES, message, atom.atom_id
                )

        if has_disconnected_fragments(molecule):
            result.add_warning(
                "Molecule contains disconnected fragments. "
                "If this is intentional (e.g., a salt), you can ignore this warning."
            )

        return result

    @staticmethod
    def _check_bond_types(molecule: MolecularGraph, atom: Atom) -> List[str]:
        errors = []
        bonds = molecule.get_bonds_for_atom(atom.atom_id)
        symbol = atom.symbol.upper()

        if symbol in HALOGENS and atom.formal_charge == 0:
            if any(bond.bond_type is not BondType.SINGLE for bond in bonds):
                errors.append(
                    f"Halogen {atom.symbol} (ID: {atom.atom_id}) has non-single bonds, "
                    "which is unusual for neutral halogens."
                )

        if symbol == "O" and any(bond.bond_type is BondType.TRIPLE for bond in bonds):
            errors.append(f"Oxygen atom (ID: {atom.atom_id}) cannot form triple bonds.")

        return errors
