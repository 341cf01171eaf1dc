"""Tests for circular fingerprints and their text form."""

import numpy as np
import pytest

from molecule_lookup import fingerprint, parse
from molecule_lookup.core.domain.implementations.circular_fingerprint import (
    CircularFingerprintGenerator,
    circular_feature,
    feature_bit,
    tokenize_topology,
)
from molecule_lookup.core.domain.models import (
    FINGERPRINT_SIZE,
    fingerprint_to_array,
    parse_fingerprint_bits,
    serialize_fingerprint,
)


class TestTokenizeTopology:
    def test_chain(self):
        atoms, adjacency = tokenize_topology("CCO")

        assert atoms == ["C", "C", "O"]
        assert adjacency[1] == [(0, 1), (2, 1)]

    def test_bond_order(self):
        _, adjacency = tokenize_topology("C=O")

        assert adjacency[0] == [(1, 2)]

    def test_ring_digits_add_adjacency(self):
        atoms, adjacency = tokenize_topology("c1ccccc1")

        assert len(atoms) == 6
        assert {n for n, _ in adjacency[0]} == {1, 5}

    def test_bracket_keeps_element_only(self):
        assert tokenize_topology("[NH4+]")[0] == ["N"]
        assert tokenize_topology("[nH]")[0] == ["n"]

    def test_dot_breaks_chain(self):
        _, adjacency = tokenize_topology("CC.O")

        assert adjacency[2] == []


class TestCircularFeature:
    def test_radius_zero_is_symbol(self):
        atoms, adjacency = tokenize_topology("CCO")

        assert circular_feature(atoms, adjacency, 2, 0) == "O"

    def test_shells(self):
        atoms, adjacency = tokenize_topology("CCO")

        assert circular_feature(atoms, adjacency, 1, 1) == "C:C1,O1"
        assert circular_feature(atoms, adjacency, 0, 2) == "C:C1:O1"
        # no new atoms in the second shell, nothing appended
        assert circular_feature(atoms, adjacency, 1, 2) == "C:C1,O1"


def test_feature_bit_is_stable_and_in_range():
    bit = feature_bit("C:C1,O1")

    assert bit == feature_bit("C:C1,O1")
    assert 0 <= bit < FINGERPRINT_SIZE


def test_fingerprint_is_deterministic():
    assert fingerprint("CC(=O)Oc1ccccc1C(=O)O") == fingerprint("CC(=O)Oc1ccccc1C(=O)O")


def test_fingerprint_bits_in_range():
    bits = fingerprint("CC(=O)Oc1ccccc1C(=O)O")

    assert bits
    assert all(0 <= bit < FINGERPRINT_SIZE for bit in bits)


@pytest.mark.parametrize("smiles", ["", "   ", None])
def test_blank_input_gives_empty_fingerprint(smiles):
    assert CircularFingerprintGenerator().generate(smiles) == frozenset()


def test_graph_input_matches_text():
    assert fingerprint(parse("CCO")) == fingerprint("CCO")


def test_functional_groups():
    generator = CircularFingerprintGenerator()

    assert "hydroxyl" in generator.matched_functional_groups("CCO")
    assert {"carboxyl", "hydroxyl"} <= set(generator.matched_functional_groups("CC(=O)O"))
    assert "carbonyl" not in generator.matched_functional_groups("CC(=O)O")
    assert "carbonyl" in generator.matched_functional_groups("CC=O")
    assert "halogen" in generator.matched_functional_groups("CCl")
    assert generator.matched_functional_groups("CC") == []


def test_generator_rejects_bad_settings():
    with pytest.raises(ValueError):
        CircularFingerprintGenerator(radius=-1)
    with pytest.raises(ValueError):
        CircularFingerprintGenerator(size=0)


class TestFingerprintText:
    def test_serialize_sorts(self):
        assert serialize_fingerprint({5, 1, 3}) == "1,3,5"
        assert serialize_fingerprint(set()) == ""

    def test_parse_tolerates_blanks(self):
        assert parse_fingerprint_bits(" 1, ,3 ") == frozenset({1, 3})
        assert parse_fingerprint_bits("") == frozenset()

    def test_round_trip(self):
        bits = fingerprint("c1ccccc1O")

        assert parse_fingerprint_bits(serialize_fingerprint(bits)) == bits

    @pytest.mark.parametrize("text", ["abc", "1,x", "5000", "-1"])
    def test_parse_rejects_bad_bits(self, text):
        with pytest.raises(ValueError):
            parse_fingerprint_bits(text)


def test_fingerprint_to_array():
    vector = fingerprint_to_array({0, 7, 2047})

    assert vector.shape == (FINGERPRINT_SIZE,)
    assert vector.dtype == np.uint8
    assert vector.sum() == 3
    assert vector[7] == 1


def test_non_ascii_digits_are_ignored():
    assert fingerprint("C²C") == fingerprint("CC")
    assert tokenize_topology("C%²³C")[0] == ["C", "C"]
