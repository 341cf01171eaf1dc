#!/usr/bin/env python3
# src/molecule_lookup/core/domain/models/atom.py

"""
Domain model representing an atom in a molecular structure.
"""

from dataclasses import dataclass
from typing import Optional

MAX_VALENCE = {
    "H": 1,
    "C": 4,
    "N": 3,
    "O": 2,
    "S": 6,
    "P": 5,
    "F": 1,
    "CL": 1,
    "BR": 1,
    "I": 1,
}

DEFAULT_MAX_VALENCE = 4


@dataclass
class Atom:
    """Represents an atom in a molecular structure."""

    atom_id: int
    symbol: str
    atomic_number: int = 0
    formal_charge: int = 0
    implicit_hydrogens: int = 0
    is_chiral_center: bool = False
    chiral_configuration: Optional[str] = None  # "R", "S" or None

    @property
    def max_valence(self) -> int:
        """Maximum valence for this atom based on its element."""
        return MAX_VALENCE.get(self.symbol.upper(), DEFAULT_MAX_VALENCE)
