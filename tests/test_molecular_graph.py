import pytest
import networkx as nx

from molecule_lookup.core.domain.models import Atom, Bond, BondType, MolecularGraph


def test_molecular_graph(alanine):
    """Test lookups and valence on a hand-built graph."""
    assert len(alanine) == 6
    assert len(alanine.bonds) == 5

    neighbours = [a.atom_id for a in alanine.get_connected_atoms(0)]
    assert neighbours == [1, 2, 3]

    # C=O plus C-O plus C-alpha
    assert alanine.get_atom_valence(3) == 4
    # three bonds plus one implicit hydrogen
    assert alanine.get_atom_valence(0) == 4
    assert alanine.get_atom_valence(99) == 0

    assert [a.atom_id for a in alanine.get_chiral_centers()] == [0]
    assert alanine.total_charge == 0
    assert not alanine.is_empty()


def test_add_bond_rejects_unknown_atom():
    graph = MolecularGraph([Atom(atom_id=0, symbol="C")])

    with pytest.raises(ValueError):
        graph.add_bond(Bond(bond_id=0, atom1_id=0, atom2_id=1))


def test_add_bond_rejects_self_bond():
    graph = MolecularGraph([Atom(atom_id=0, symbol="C")])

    with pytest.raises(ValueError):
        graph.add_bond(Bond(bond_id=0, atom1_id=0, atom2_id=0))


def test_add_atom_rejects_duplicate_id():
    graph = MolecularGraph([Atom(atom_id=0, symbol="C")])

    with pytest.raises(ValueError):
        graph.add_atom(Atom(atom_id=0, symbol="N"))


def test_get_atom_unknown_id_raises_key_error():
    with pytest.raises(KeyError):
        MolecularGraph().get_atom(3)


def test_bond_other_atom():
    bond = Bond(bond_id=0, atom1_id=2, atom2_id=5, bond_type=BondType.TRIPLE)

    assert bond.other_atom(2) == 5
    assert bond.other_atom(5) == 2
    assert bond.order == 3
    assert bond.involves(5)
    with pytest.raises(ValueError):
        bond.other_atom(7)


def test_aromatic_bond_counts_as_one():
    assert Bond(bond_id=0, atom1_id=0, atom2_id=1, bond_type=BondType.AROMATIC).order == 1


def test_to_networkx(alanine):
    G = alanine.to_networkx()

    assert isinstance(G, nx.Graph)
    assert G.number_of_nodes() == 6
    assert G.number_of_edges() == 5
    assert G.nodes[0]["symbol"] == "C"
    assert G.edges[3, 4]["order"] == 2


def test_empty_graph():
    graph = MolecularGraph()

    assert graph.is_empty()
    assert graph.total_charge == 0
    assert graph.get_bonds_for_atom(0) == []


def test_atom_max_valence():
    assert Atom(atom_id=0, symbol="C").max_valence == 4
    assert Atom(atom_id=0, symbol="Cl").max_valence == 1
    assert Atom(atom_id=0, symbol="S").max_valence == 6
    assert Atom(atom_id=0, symbol="Fe").max_valence == 4


def test_has_atom(alanine):
    assert alanine.has_atom(5)
    assert not alanine.has_atom(6)
