"""Shared molecule fixtures."""

import pytest

from molecule_lookup.core.domain.models import Atom, Bond, BondType, MolecularGraph


def build_alanine(chiral_configuration=None) -> MolecularGraph:
    """Alanine with explicit hydrogen counts; the alpha carbon is atom 0."""
    alpha = Atom(atom_id=0, symbol="C", atomic_number=6, implicit_hydrogens=1)
    if chiral_configuration is not None:
        alpha.is_chiral_center = True
        alpha.chiral_configuration = chiral_configuration

    atoms = [
        alpha,
        Atom(atom_id=1, symbol="N", atomic_number=7, implicit_hydrogens=2),
        Atom(atom_id=2, symbol="C", atomic_number=6, implicit_hydrogens=3),
        Atom(atom_id=3, symbol="C", atomic_number=6),
        Atom(atom_id=4, symbol="O", atomic_number=8),
        Atom(atom_id=5, symbol="O", atomic_number=8, implicit_hydrogens=1),
    ]
    bonds = [
        Bond(bond_id=0, atom1_id=0, atom2_id=1),
        Bond(bond_id=1, atom1_id=0, atom2_id=2),
        Bond(bond_id=2, atom1_id=0, atom2_id=3),
        Bond(bond_id=3, atom1_id=3, atom2_id=4, bond_type=BondType.DOUBLE),
        Bond(bond_id=4, atom1_id=3, atom2_id=5),
    ]
    return MolecularGraph(atoms, bonds)


def single_atom(symbol: str, hydrogens: int = 0, charge: int = 0) -> MolecularGraph:
    return MolecularGraph(
        [Atom(atom_id=0, symbol=symbol, implicit_hydrogens=hydrogens, formal_charge=charge)]
    )


@pytest.fixture
def alanine():
    return build_alanine(chiral_configuration="R")


@pytest.fixture
def water():
    return single_atom("O", hydrogens=2)


@pytest.fixture
def methane():
    return single_atom("C", hydrogens=4)
