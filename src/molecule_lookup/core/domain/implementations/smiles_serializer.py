"""Depth-first serializer turning a MolecularGraph into SMILES text."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..models.atom import Atom
from ..models.bond import Bond, BondType
from ..models.molecular_graph import MolecularGraph

# Atoms that can be written without brackets (compared case-insensitively,
# so aromatic lower-case forms qualify too).
ORGANIC_SUBSET = {"B", "C", "N", "O", "P", "S", "F", "CL", "BR", "I"}

BOND_TOKENS = {
    BondType.SINGLE: "",
    BondType.DOUBLE: "=",
    BondType.TRIPLE: "#",
    BondType.AROMATIC: ":",
}

_ALLOWED_CHARACTERS = re.compile(r"[\[\]A-Za-z0-9@+\-=#():/\\%.]+")


def is_valid_syntax(smiles: str) -> bool:
    """
    Check SMILES text for allowed characters and balanced ``[]``/``()``.

    No chemistry is checked: ``"XYZ"`` passes, ``"C(C"`` does not.
    """
    if not smiles or not smiles.strip():
        return False
    if not _ALLOWED_CHARACTERS.fullmatch(smiles):
        return False

    brackets = 0
    parens = 0
    for c in smiles:
        if c == "[":
            brackets += 1
        elif c == "]":
            brackets -= 1
        elif c == "(":
            parens += 1
        elif c == ")":
            parens -= 1
        if brackets < 0 or parens < 0:
            return False

    return brackets == 0 and parens == 0


def ring_label(number: int) -> str:
    """Ring closure label text; two-digit numbers use the ``%nn`` form."""
    return str(number) if number < 10 else f"%{number:02d}"


@dataclass
class _TraversalPlan:
    """Spanning forest and ring closures found by the first DFS pass."""

    roots: List[int] = field(default_factory=list)
    children: Dict[int, List[Tuple[Bond, int]]] = field(default_factory=dict)
    # atom id -> [(ring number, bond, opens_here)]
    ring_marks: Dict[int, List[Tuple[int, Bond, bool]]] = field(default_factory=dict)


class SmilesSerializer:
    """Serializer producing traversal-order dependent (non-canonical) SMILES.

    Traversal starts at the first atom and follows bond-list order. A bond to
    an already visited atom is a ring closure and receives the next ring
    number (1, 2, ...; numbers are never reused). The label is written at
    both ends, the bond symbol only where the ring opens. All unvisited
    neighbours but the last are written as parenthesised branches.
    Disconnected fragments follow, separated by ``.``.
    """

    def serialize(self, molecule: MolecularGraph) -> str:
        """
        Convert a molecular graph to SMILES.

        Args:
            molecule: Structure to serialize

        Returns:
            SMILES string, empty for an empty molecule
        """
        if molecule.is_empty():
            return ""

        plan = self._plan(molecule)
        fragments = []
        for root in plan.roots:
            parts: List[str] = []
            self._emit(molecule, root, plan, parts)
            fragments.append("".join(parts))
        return ".".join(fragments)

    def _plan(self, molecule: MolecularGraph) -> _TraversalPlan:
        plan = _TraversalPlan()
        visited: Set[int] = set()
        closed_pairs: Set[Tuple[int, int]] = set()
        ring_counter = [1]

        def visit(atom_id: int, incoming: Optional[Bond] = None) -> None:
            visited.add(atom_id)
            plan.children.setdefault(atom_id, [])

            candidates = []
            for bond in molecule.get_bonds_for_atom(atom_id):
                if bond is incoming:
                    continue
                neighbour = bond.other_atom(atom_id)
                if neighbour in visited:
                    self._close_ring(plan, closed_pairs, ring_counter, atom_id, neighbour, bond)
                else:
                    candidates.append((bond, neighbour))

            for bond, neighbour in candidates:
                if neighbour in visited:
                    # Reached through an earlier branch, which already
                    # recorded this bond as a ring closure.
                    continue
                plan.children[atom_id].append((bond, neighbour))
                visit(neighbour, bond)

        for atom in molecule.atoms:
            if atom.atom_id not in visited:
                plan.roots.append(atom.atom_id)
                visit(atom.atom_id)

        return plan

    @staticmethod
    def _close_ring(
        plan: _TraversalPlan,
        closed_pairs: Set[Tuple[int, int]],
        ring_counter: List[int],
        closing_atom: int,
        opening_atom: int,
        bond: Bond,
    ) -> None:
        key = (min(closing_atom, opening_atom), max(closing_atom, opening_atom))
        if key in closed_pairs:
            return
        closed_pairs.add(key)
        number = ring_counter[0]
        ring_counter[0] += 1
        plan.ring_marks.setdefault(opening_atom, []).append((number, bond, True))
        plan.ring_marks.setdefault(closing_atom, []).append((number, bond, False))

    def _emit(
        self, molecule: MolecularGraph, atom_id: int, plan: _TraversalPlan, parts: List[str]
    ) -> None:
        parts.append(self.atom_token(molecule.get_atom(atom_id)))

        for number, bond, opens_here in sorted(
            plan.ring_marks.get(atom_id, []), key=lambda mark: mark[0]
        ):
            if opens_here:
                parts.append(BOND_TOKENS[bond.bond_type])
            parts.append(ring_label(number))

        children = plan.children.get(atom_id, [])
        for index, (bond, child) in enumerate(children):
            is_last = index == len(children) - 1
            if not is_last:
                parts.append("(")
            parts.append(BOND_TOKENS[bond.bond_type])
            self._emit(molecule, child, plan, parts)
            if not is_last:
                parts.append(")")

    @staticmethod
    def atom_token(atom: Atom) -> str:
        """SMILES token for a single atom, bracketed when required."""
        needs_brackets = (
            atom.symbol.upper() not in ORGANIC_SUBSET
            or atom.formal_charge != 0
            or atom.is_chiral_center
        )
        if not needs_brackets:
            return atom.symbol

        token = ["[", atom.symbol]

        if atom.is_chiral_center and atom.chiral_configuration:
            token.append("@@" if atom.chiral_configuration == "R" else "@")

        if atom.implicit_hydrogens > 0:
            token.append("H")
            if atom.implicit_hydrogens > 1:
                token.append(str(atom.implicit_hydrogens))

        if atom.formal_charge > 0:
            token.append("+")
            if atom.formal_charge > 1:
                token.append(str(atom.formal_charge))
        elif atom.formal_charge < 0:
            token.append("-")
            if atom.formal_charge < -1:
                token.append(str(abs(atom.formal_charge)))

        token.append("]")
        return "".join(token)
