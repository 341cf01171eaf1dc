"""Concrete parsers, validation handlers and similarity strategies."""

from .smiles_parser import SmilesParser
from .smiles_serializer import SmilesSerializer, is_valid_syntax
from .default_smiles_converter import DefaultSmilesConverter
from .charge_balance_handler import ChargeBalanceHandler
from .bonding_rules_handler import BondingRulesHandler
from .stereochemistry_handler import StereochemistryHandler
from .circular_fingerprint import CircularFingerprintGenerator
from .tanimoto_calculator import TanimotoCalculator, bulk_tanimoto, tanimoto

__all__ = [
    "SmilesParser",
    "SmilesSerializer",
    "is_valid_syntax",
    "DefaultSmilesConverter",
    "ChargeBalanceHandler",
    "BondingRulesHandler",
    "StereochemistryHandler",
    "CircularFingerprintGenerator",
    "TanimotoCalculator",
    "bulk_tanimoto",
    "tanimoto",
]
