#!/usr/bin/env python3
# src/molecule_lookup/core/domain/models/molecular_graph.py

"""
Domain model representing a molecular structure as a graph.
"""

from typing import Dict, List, Optional

import networkx as nx

from .atom import Atom
from .bond import Bond


class MolecularGraph:
    """Graph representation of a molecular structure.

    Atoms and bonds live in flat lists. Lookups go through an atom-id index
    and a per-atom bond index, both kept in step by ``add_atom``/``add_bond``.
    The order of ``atoms`` is significant: serialization starts at the first
    atom.
    """

    def __init__(
        self, atoms: Optional[List[Atom]] = None, bonds: Optional[List[Bond]] = None
    ):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: Ordered list of Atom objects
            bonds: List of Bond objects referencing atoms by id

        Raises:
            ValueError: If atom ids repeat or a bond references a missing atom
        """
        self.atoms: List[Atom] = []
        self.bonds: List[Bond] = []
        self._atom_index: Dict[int, int] = {}
        self._bonds_by_atom: Dict[int, List[Bond]] = {}

        for atom in atoms or []:
            self.add_atom(atom)
        for bond in bonds or []:
            self.add_bond(bond)

    def add_atom(self, atom: Atom) -> Atom:
        """Append an atom, keeping the id index consistent."""
        if atom.atom_id in self._atom_index:
            raise ValueError(f"Duplicate atom id {atom.atom_id}")
        self._atom_index[atom.atom_id] = len(self.atoms)
        self._bonds_by_atom[atom.atom_id] = []
        self.atoms.append(atom)
        return atom

    def add_bond(self, bond: Bond) -> Bond:
        """Append a bond between two existing, distinct atoms."""
        for atom_id in (bond.atom1_id, bond.atom2_id):
            if atom_id not in self._atom_index:
                raise ValueError(
                    f"Bond {bond.bond_id} references unknown atom id {atom_id}"
                )
        if bond.atom1_id == bond.atom2_id:
            raise ValueError(f"Bond {bond.bond_id} connects atom {bond.atom1_id} to itself")
        self.bonds.append(bond)
        self._bonds_by_atom[bond.atom1_id].append(bond)
        self._bonds_by_atom[bond.atom2_id].append(bond)
        return bond

    def has_atom(self, atom_id: int) -> bool:
        return atom_id in self._atom_index

    def get_atom(self, atom_id: int) -> Atom:
        """Get an atom by id.

        Raises:
            KeyError: If no atom carries that id
        """
        return self.atoms[self._atom_index[atom_id]]

    def get_bonds_for_atom(self, atom_id: int) -> List[Bond]:
        """Bonds touching the atom, in bond-list order."""
        return list(self._bonds_by_atom.get(atom_id, []))

    def get_connected_atoms(self, atom_id: int) -> List[Atom]:
        """Neighbouring atoms, in bond-list order."""
        return [
            self.get_atom(bond.other_atom(atom_id))
            for bond in self._bonds_by_atom.get(atom_id, [])
        ]

    def get_atom_valence(self, atom_id: int) -> int:
        """Sum of incident bond orders plus implicit hydrogens."""
        if atom_id not in self._atom_index:
            return 0
        atom = self.get_atom(atom_id)
        return (
            sum(bond.order for bond in self._bonds_by_atom[atom_id])
            + atom.implicit_hydrogens
        )

    def get_chiral_centers(self) -> List[Atom]:
        return [atom for atom in self.atoms if atom.is_chiral_center]

    @property
    def total_charge(self) -> int:
        """Total formal charge of the molecule."""
        return sum(atom.formal_charge for atom in self.atoms)

    def is_empty(self) -> bool:
        return not self.atoms

    def to_networkx(self) -> nx.Graph:
        """Convert to a NetworkX graph keyed by atom id."""
        G = nx.Graph()

        for atom in self.atoms:
            G.add_node(
                atom.atom_id,
                symbol=atom.symbol,
                formal_charge=atom.formal_charge,
                implicit_hydrogens=atom.implicit_hydrogens,
            )

        for bond in self.bonds:
            G.add_edge(
                bond.atom1_id,
                bond.atom2_id,
                bond_id=bond.bond_id,
                order=bond.order,
                bond_type=bond.bond_type,
            )

        return G

    def __len__(self) -> int:
        return len(self.atoms)

    def __repr__(self) -> str:
        return f"MolecularGraph(atoms={len(self.atoms)}, bonds={len(self.bonds)})"
