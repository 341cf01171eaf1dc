#!/usr/bin/env python3
# src/molecule_lookup/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass
from enum import Enum


class BondType(Enum):
    """Enumeration of possible bond types."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    AROMATIC = 4


class BondStereo(Enum):
    """Stereo marker drawn on a bond."""

    NONE = "none"
    UP = "up"  # wedge, toward the viewer
    DOWN = "down"  # dash, away from the viewer
    EITHER = "either"  # wavy, unspecified


_BOND_ORDERS = {
    BondType.SINGLE: 1,
    BondType.DOUBLE: 2,
    BondType.TRIPLE: 3,
    BondType.AROMATIC: 1,
}


@dataclass
class Bond:
    """Represents a chemical bond between two atoms."""

    bond_id: int
    atom1_id: int
    atom2_id: int
    bond_type: BondType = BondType.SINGLE
    stereo: BondStereo = BondStereo.NONE

    @property
    def order(self) -> int:
        """Bond order used for valence sums (aromatic counts as 1)."""
        return _BOND_ORDERS[self.bond_type]

    def involves(self, atom_id: int) -> bool:
        return atom_id in (self.atom1_id, self.atom2_id)

    def other_atom(self, atom_id: int) -> int:
        """Return the endpoint opposite to ``atom_id``."""
        if atom_id == self.atom1_id:
            return self.atom2_id
        if atom_id == self.atom2_id:
            return self.atom1_id
        raise ValueError(f"Atom {atom_id} is not part of bond {self.bond_id}")
