"""Tests for the molecule-lookup command line."""

import logging

import pytest

from molecule_lookup.presentation.cli.main import main, read_candidates


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures root logging; put it back afterwards."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_convert(capsys):
    assert main(["convert", "C(C)C"]) == 0
    assert capsys.readouterr().out.strip() == "C(C)C"


def test_convert_strict_rejects_malformed(capsys):
    assert main(["--strict", "convert", "C1CC"]) == 2
    assert "Syntax error" in capsys.readouterr().err


def test_validate_valid(capsys):
    assert main(["validate", "[CH4]"]) == 0
    assert capsys.readouterr().out.strip().endswith("valid")


def test_validate_invalid(capsys):
    assert main(["validate", "[CH5]"]) == 1

    out = capsys.readouterr().out
    assert "ERROR [InvalidBondingRules]" in out
    assert out.strip().endswith("invalid")


def test_fingerprint(capsys):
    assert main(["fingerprint", "CCO"]) == 0

    bits = capsys.readouterr().out.strip().split(",")
    assert bits == sorted(bits, key=int)


def test_similar(tmp_path, capsys):
    candidates = tmp_path / "candidates.smi"
    candidates.write_text("# test set\nCCO ethanol\n\nc1ccccc1 benzene\nCCCO\n")

    assert main(["similar", "CCO", str(candidates), "--threshold", "0.0"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[0] == "1.0000\tCCO\tethanol"


def test_similar_bad_threshold(tmp_path, capsys):
    candidates = tmp_path / "candidates.smi"
    candidates.write_text("CCO\n")

    assert main(["similar", "CCO", str(candidates), "--threshold", "2"]) == 2


def test_similar_missing_file(tmp_path):
    assert main(["similar", "CCO", str(tmp_path / "missing.smi")]) == 2


def test_read_candidates(tmp_path):
    path = tmp_path / "candidates.smi"
    path.write_text("CCO ethanol absolute\nCCN\n")

    records = read_candidates(path)

    assert [r.smiles for r in records] == ["CCO", "CCN"]
    assert records[0].name == "ethanol absolute"
    assert records[1].identifier == "2"
