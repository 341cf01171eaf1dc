# src/molecule_lookup/presentation/cli/main.py
"""Command-line interface for SMILES conversion, validation and similarity search."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ...core.domain.exceptions import SmilesSyntaxError
from ...core.domain.implementations.default_smiles_converter import DefaultSmilesConverter
from ...core.domain.implementations.smiles_parser import SmilesParser
from ...core.domain.models.fingerprint import serialize_fingerprint
from ...core.domain.models.search_config import SimilaritySearchConfig
from ...core.domain.models.similarity_result import MoleculeRecord
from ...core.services.similarity_service import SimilarityService
from ...core.services.validation_service import MoleculeValidator
from ...core.utils.benchmarking import Timer
from ...core.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="molecule-lookup",
        description="Convert, validate and compare molecules written as SMILES",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show detailed processing information"
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject malformed SMILES instead of skipping bad characters",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Parse and re-serialize SMILES")
    convert.add_argument("smiles", help="Input SMILES")

    validate = subparsers.add_parser("validate", help="Check a structure for chemical problems")
    validate.add_argument("smiles", help="Input SMILES")

    fingerprint = subparsers.add_parser("fingerprint", help="Print fingerprint bit positions")
    fingerprint.add_argument("smiles", help="Input SMILES")

    similar = subparsers.add_parser("similar", help="Rank candidates by Tanimoto similarity")
    similar.add_argument("query", help="Query SMILES")
    similar.add_argument(
        "candidates", help="File with one 'smiles [name]' candidate per line"
    )
    similar.add_argument(
        "--threshold",
        type=float,
        default=0.8,
        help="Minimum Tanimoto coefficient (0.0-1.0)",
    )
    similar.add_argument(
        "--max-results", type=int, default=100, help="Maximum number of matches"
    )
    similar.add_argument(
        "--batch-size", type=int, default=1000, help="Candidates scored per batch"
    )
    similar.add_argument("--progress", action="store_true", help="Show a progress bar")

    return parser


def read_candidates(path: Path) -> List[MoleculeRecord]:
    """
    Load candidates from a text file.

    Blank lines and lines starting with '#' are skipped. The first field is
    the SMILES; the rest of the line, if any, is the name.
    """
    records = []
    with open(path) as handle:
        for line_number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split(None, 1)
            name = parts[1] if len(parts) > 1 else ""
            records.append(
                MoleculeRecord(identifier=str(line_number), smiles=parts[0], name=name)
            )
    return records


def run_convert(args: argparse.Namespace, converter: DefaultSmilesConverter) -> int:
    print(converter.normalize(args.smiles))
    return 0


def run_validate(args: argparse.Namespace, converter: DefaultSmilesConverter) -> int:
    molecule = converter.from_smiles(args.smiles)
    validator = MoleculeValidator.create_default()

    with Timer("validate") as t:
        result = validator.validate(molecule)
    logger.info(f"Validation took {t.elapsed_ms():.2f} ms")
    logger.debug(validator.stats.report())

    for error in result.errors:
        print(f"ERROR [{error.reason.value}]: {error.message}")
    for warning in result.warnings:
        print(f"WARNING: {warning.message}")
    print("valid" if result.is_valid else "invalid")

    return 0 if result.is_valid else 1


def run_fingerprint(args: argparse.Namespace, service: SimilarityService) -> int:
    print(serialize_fingerprint(service.calculator.generate_fingerprint(args.smiles)))
    return 0


def run_similar(args: argparse.Namespace, service: SimilarityService) -> int:
    candidates = read_candidates(Path(args.candidates))
    logger.info(f"Loaded {len(candidates)} candidates from {args.candidates}")

    for match in service.find_similar(args.query, candidates):
        record = match.record
        label = f"\t{record.name}" if record.name else ""
        print(f"{match.tanimoto_coefficient:.4f}\t{record.smiles}{label}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the molecule-lookup CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    converter = DefaultSmilesConverter(parser=SmilesParser(strict=args.strict))

    try:
        if args.command == "convert":
            return run_convert(args, converter)
        if args.command == "validate":
            return run_validate(args, converter)

        config = SimilaritySearchConfig(show_progress=getattr(args, "progress", False))
        if args.command == "similar":
            config.with_similarity_threshold(args.threshold)
            config.with_max_results(args.max_results)
            config.with_batch_size(args.batch_size)
        service = SimilarityService(config)

        if args.command == "fingerprint":
            return run_fingerprint(args, service)
        return run_similar(args, service)
    except SmilesSyntaxError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
