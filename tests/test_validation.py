"""Tests for the validation handlers and MoleculeValidator."""

import pytest

from conftest import build_alanine, single_atom
from molecule_lookup import parse, validate
from molecule_lookup.core.domain.implementations import (
    BondingRulesHandler,
    ChargeBalanceHandler,
    StereochemistryHandler,
)
from molecule_lookup.core.domain.implementations.bonding_rules_handler import expected_valences
from molecule_lookup.core.domain.implementations.stereochemistry_handler import (
    find_potential_chiral_centers,
    find_potential_ez_bonds,
)
from molecule_lookup.core.domain.models import (
    Atom,
    Bond,
    BondStereo,
    MolecularGraph,
    ValidationFailureReason,
    ValidationResult,
)
from molecule_lookup.core.services import MoleculeValidator


class TestChargeBalanceHandler:
    def test_neutral_molecule_passes(self, water):
        result = ChargeBalanceHandler().validate(water)

        assert result.is_valid
        assert not result.has_warnings

    def test_empty_structure(self):
        result = ChargeBalanceHandler().validate(MolecularGraph())

        assert not result.is_valid
        assert result.failure_reason is ValidationFailureReason.EMPTY_STRUCTURE

    def test_total_charge_out_of_bounds(self):
        result = ChargeBalanceHandler().validate(single_atom("C", charge=5))

        assert result.failure_reason is ValidationFailureReason.CHARGE_IMBALANCE
        assert "exceeds reasonable bounds" in result.error_message

    def test_unusual_atom_charge(self):
        result = ChargeBalanceHandler().validate(single_atom("O", charge=1))

        assert not result.is_valid
        assert result.failure_reason is ValidationFailureReason.CHARGE_IMBALANCE
        assert result.errors[0].atom_id == 0

    def test_unlisted_element_allows_two(self):
        assert ChargeBalanceHandler().validate(single_atom("Fe", charge=2)).is_valid
        assert not ChargeBalanceHandler().validate(single_atom("Fe", charge=3)).is_valid

    def test_net_charge_is_a_warning(self):
        result = ChargeBalanceHandler().validate(single_atom("N", hydrogens=4, charge=1))

        assert result.is_valid
        assert "+1" in result.warnings[0].message


class TestBondingRulesHandler:
    def test_expected_valences_shift_with_charge(self):
        assert expected_valences("N", 0) == {3, 5}
        assert expected_valences("N", 1) == {2, 3, 4, 5}
        assert expected_valences("Xx", 0) == {4}

    def test_saturated_atoms_pass(self, methane):
        result = BondingRulesHandler().validate(methane)

        assert result.is_valid
        assert not result.has_warnings

    def test_overvalent_carbon(self):
        result = BondingRulesHandler().validate(single_atom("C", hydrogens=5))

        assert not result.is_valid
        assert result.failure_reason is ValidationFailureReason.INVALID_BONDING_RULES
        assert "exceeds maximum allowed valence of 4" in result.error_message

    def test_undervalent_atom_is_a_warning(self):
        result = BondingRulesHandler().validate(parse("CCO"))

        assert result.is_valid
        assert len(result.warnings) == 3
        assert "missing hydrogen" in result.warnings[0].message

    def test_oxygen_triple_bond(self):
        result = BondingRulesHandler().validate(parse("C#O"))

        assert not result.is_valid
        assert any("cannot form triple bonds" in e.message for e in result.errors)

    def test_halogen_double_bond(self):
        result = BondingRulesHandler().validate(parse("C=F"))

        assert any("non-single bonds" in e.message for e in result.errors)

    def test_disconnected_fragments_warning(self):
        result = BondingRulesHandler().validate(parse("[Na+].[Cl-]"))

        assert result.is_valid
        assert any("disconnected fragments" in w.message for w in result.warnings)


class TestStereochemistryHandler:
    def test_declared_center_passes(self, alanine):
        result = StereochemistryHandler().validate(alanine)

        assert result.is_valid
        assert not result.has_warnings

    def test_potential_centers(self):
        assert find_potential_chiral_centers(build_alanine()) == [0]
        assert find_potential_chiral_centers(single_atom("C", hydrogens=4)) == []

    def test_undeclared_center_is_a_warning(self):
        result = StereochemistryHandler().validate(build_alanine())

        assert result.is_valid
        assert "Potential chiral center(s) detected at atom ID(s): 0" in result.warnings[0].message

    def test_marked_atom_without_four_substituents(self):
        methane = single_atom("C", hydrogens=4)
        methane.atoms[0].is_chiral_center = True
        methane.atoms[0].chiral_configuration = "R"

        result = StereochemistryHandler().validate(methane)

        assert not result.is_valid
        assert result.failure_reason is ValidationFailureReason.INVALID_STEREOCHEMISTRY

    def test_invalid_configuration_label(self):
        result = StereochemistryHandler().validate(build_alanine(chiral_configuration="X"))

        assert not result.is_valid
        assert "invalid chiral configuration 'X'" in result.error_message

    def test_ez_double_bond(self):
        molecule = parse("CC=CC")

        assert find_potential_ez_bonds(molecule) == [1]
        result = StereochemistryHandler().validate(molecule)
        assert "E/Z isomerism" in result.warnings[0].message

    def test_terminal_double_bond_has_no_ez(self):
        assert find_potential_ez_bonds(parse("CC=C")) == []

    def test_stereo_bond_away_from_center(self):
        molecule = MolecularGraph(
            [Atom(atom_id=0, symbol="C"), Atom(atom_id=1, symbol="C")],
            [Bond(bond_id=0, atom1_id=0, atom2_id=1, stereo=BondStereo.UP)],
        )

        result = StereochemistryHandler().validate(molecule)

        assert result.is_valid
        assert "not connected to a designated chiral center" in result.warnings[0].message


class TestMoleculeValidator:
    def test_none_is_empty_structure(self):
        result = MoleculeValidator.create_default().validate(None)

        assert not result.is_valid
        assert result.failure_reason is ValidationFailureReason.EMPTY_STRUCTURE

    def test_empty_molecule_is_empty_structure(self):
        assert validate(MolecularGraph()).failure_reason is ValidationFailureReason.EMPTY_STRUCTURE

    @pytest.mark.parametrize("fixture_name", ["water", "methane", "alanine"])
    def test_valid_molecules(self, fixture_name, request):
        result = validate(request.getfixturevalue(fixture_name))

        assert result.is_valid
        assert result.failure_reason is ValidationFailureReason.NONE
        assert result.error_message is None

    def test_stops_at_first_failing_handler(self):
        # Bad charge and overvalent: only the charge problem is reported.
        result = validate(single_atom("C", hydrogens=5, charge=2))

        assert result.failure_reason is ValidationFailureReason.CHARGE_IMBALANCE
        assert all(e.reason is ValidationFailureReason.CHARGE_IMBALANCE for e in result.errors)

    def test_warnings_from_all_handlers_are_kept(self):
        result = validate(parse("C[N+](C)(C)C"))

        assert result.is_valid
        messages = [w.message for w in result.warnings]
        assert "net charge of +1" in messages[0]
        assert any("missing hydrogen" in m for m in messages[1:])

    def test_failure_keeps_earlier_warnings(self):
        result = validate(parse("[O-]C#O"))

        assert not result.is_valid
        assert result.failure_reason is ValidationFailureReason.INVALID_BONDING_RULES
        assert "net charge of -1" in result.warnings[0].message

    def test_parsed_ethanol_is_valid_with_warnings(self):
        result = validate(parse("CCO"))

        assert result.is_valid
        assert result.has_warnings

    def test_create_with_handlers_runs_only_given_handlers(self):
        validator = MoleculeValidator.create_with_handlers(StereochemistryHandler())

        assert validator.validate(single_atom("C", charge=5)).is_valid

    def test_create_with_handlers_requires_one(self):
        with pytest.raises(ValueError):
            MoleculeValidator.create_with_handlers()

    def test_handler_order(self):
        validator = MoleculeValidator.create_default()

        assert [h.handler_name for h in validator.handlers] == [
            "Charge Balance Validator",
            "Bonding Rules Validator",
            "Stereochemistry Validator",
        ]


class TestValidationResult:
    def test_first_error_sets_reason(self):
        result = ValidationResult.success()
        result.add_error(ValidationFailureReason.INVALID_ATOM, "first")
        result.add_error(ValidationFailureReason.CHARGE_IMBALANCE, "second")

        assert result.failure_reason is ValidationFailureReason.INVALID_ATOM
        assert result.error_message == "first"
        assert len(result.errors) == 2

    def test_failure_factory(self):
        result = ValidationResult.failure(ValidationFailureReason.UNKNOWN_ERROR, "boom")

        assert not result.is_valid
        assert result.errors[0].message == "boom"
        assert result.validated_at.tzinfo is not None
