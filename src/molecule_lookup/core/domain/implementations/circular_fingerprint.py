"""Circular (Morgan-style) fingerprints computed straight from SMILES text."""

import hashlib
import re
from typing import Dict, List, Optional, Tuple, Union

from ..models.fingerprint import FINGERPRINT_RADIUS, FINGERPRINT_SIZE, Fingerprint
from ..models.molecular_graph import MolecularGraph
from .smiles_serializer import SmilesSerializer

# Substring patterns per functional group; the first hit sets the group's bit.
FUNCTIONAL_GROUPS: Dict[str, Tuple[str, ...]] = {
    "hydroxyl": ("O", "[OH]"),
    "carbonyl": ("C=O", "[C]=O"),
    "carboxyl": ("C(=O)O", "C(=O)[OH]"),
    "amine": ("N", "[NH2]", "[NH]"),
    "amide": ("C(=O)N", "NC=O"),
    "ether": ("COC", "cOc"),
    "ester": ("C(=O)OC",),
    "nitro": ("[N+](=O)[O-]", "N(=O)=O"),
    "cyano": ("C#N",),
    "halogen": ("F", "Cl", "Br", "I"),
    "aromatic": ("c1ccccc1", "c1cccc1"),
    "sulfide": ("S", "[SH]"),
    "phosphate": ("P", "P(=O)"),
}

_BOND_ORDERS = {"-": 1, "=": 2, "#": 3, ":": 1, "/": 1, "\\": 1}
_BRACKET_ELEMENT = re.compile(r"[A-Z][a-z]?|[a-z]")
_DIGITS = frozenset("0123456789")

Adjacency = Dict[int, List[Tuple[int, int]]]


def feature_bit(feature: str, size: int = FINGERPRINT_SIZE) -> int:
    """Map a feature string to a bit position with a process-independent hash."""
    digest = hashlib.blake2b(feature.encode("utf-8"), digest_size=8).digest()
    return abs(int.from_bytes(digest, "big", signed=True)) % size


def tokenize_topology(smiles: str) -> Tuple[List[str], Adjacency]:
    """
    Lightweight re-parse of SMILES into atom symbols and an adjacency map.

    Brackets contribute only their element symbol; charges, hydrogens and
    chirality are ignored. Ring labels only add adjacency.

    Returns:
        Tuple of (atom symbols by index, index -> [(neighbour index, bond order)])
    """
    atoms: List[str] = []
    adjacency: Adjacency = {}
    previous: Optional[int] = None
    order = 1
    branch_stack: List[Optional[int]] = []
    ring_openings: Dict[int, Tuple[int, int]] = {}

    def add_atom(symbol: str) -> None:
        nonlocal previous, order
        index = len(atoms)
        atoms.append(symbol)
        adjacency[index] = []
        if previous is not None:
            _connect(adjacency, previous, index, order)
        previous = index
        order = 1

    i = 0
    while i < len(smiles):
        c = smiles[i]

        if c == "(":
            branch_stack.append(previous)
        elif c == ")":
            if branch_stack:
                previous = branch_stack.pop()
        elif c in _BOND_ORDERS:
            order = _BOND_ORDERS[c]
        elif c == ".":
            previous = None
            order = 1
        elif c == "[":
            end = smiles.find("]", i)
            if end > i:
                match = _BRACKET_ELEMENT.search(smiles, i + 1, end)
                if match:
                    add_atom(match.group(0))
                i = end
        elif c.isascii() and c.isalpha():
            symbol = c
            if c.isupper() and i + 1 < len(smiles) and smiles[i + 1].islower():
                symbol += smiles[i + 1]
                i += 1
            add_atom(symbol)
        elif c in _DIGITS or c == "%":
            if c == "%":
                label_text = smiles[i + 1 : i + 3]
                i += 2
            else:
                label_text = c
            if label_text and set(label_text) <= _DIGITS and previous is not None:
                label = int(label_text)
                if label in ring_openings:
                    start, opening_order = ring_openings.pop(label)
                    if start != previous:
                        _connect(adjacency, start, previous, max(order, opening_order))
                else:
                    ring_openings[label] = (previous, order)
            order = 1

        i += 1

    return atoms, adjacency


def _connect(adjacency: Adjacency, atom1: int, atom2: int, order: int) -> None:
    adjacency[atom1].append((atom2, order))
    adjacency[atom2].append((atom1, order))


def circular_feature(atoms: List[str], adjacency: Adjacency, center: int, radius: int) -> str:
    """
    Build the feature string for ``center`` out to ``radius`` bonds.

    Each shell appends ``":"`` plus the sorted ``<symbol><order>`` tokens of
    the bonds reaching atoms not seen in earlier shells.
    """
    feature = atoms[center]
    visited = {center}
    layer = [center]

    for _ in range(radius):
        if not layer:
            break
        tokens = []
        next_layer: Dict[int, None] = {}
        for atom_index in layer:
            for neighbour, order in adjacency.get(atom_index, []):
                if neighbour not in visited:
                    tokens.append(f"{atoms[neighbour]}{order}")
                    next_layer[neighbour] = None
        if tokens:
            tokens.sort()
            feature += ":" + ",".join(tokens)
        visited.update(next_layer)
        layer = list(next_layer)

    return feature


class CircularFingerprintGenerator:
    """Generates fixed-width bit-set fingerprints.

    Atom-centred features for radius 0..``radius`` are hashed into
    ``size`` bits, followed by one bit per functional group found in the
    text. Hash collisions are accepted.
    """

    def __init__(self, radius: int = FINGERPRINT_RADIUS, size: int = FINGERPRINT_SIZE):
        if radius < 0:
            raise ValueError(f"Fingerprint radius must be non-negative, got {radius}")
        if size <= 0:
            raise ValueError(f"Fingerprint size must be greater than 0, got {size}")
        self.radius = radius
        self.size = size
        self._serializer = SmilesSerializer()

    def generate(self, source: Union[str, MolecularGraph, None]) -> Fingerprint:
        """
        Fingerprint SMILES text or a molecular graph.

        Args:
            source: SMILES string or MolecularGraph (serialized first)

        Returns:
            Frozen set of bit positions, empty for blank input
        """
        if isinstance(source, MolecularGraph):
            source = self._serializer.serialize(source)
        if source is None or not source.strip():
            return frozenset()

        smiles = source.strip()
        atoms, adjacency = tokenize_topology(smiles)
        bits = set()

        for center in range(len(atoms)):
            for radius in range(self.radius + 1):
                bits.add(feature_bit(circular_feature(atoms, adjacency, center, radius), self.size))

        bits.update(self.functional_group_bits(smiles))
        return frozenset(bits)

    def functional_group_bits(self, smiles: str) -> List[int]:
        return [feature_bit(group, self.size) for group in self.matched_functional_groups(smiles)]

    def matched_functional_groups(self, smiles: str) -> List[str]:
        """Names of the functional groups whose patterns occur in ``smiles``."""
        lowered = smiles.lower()
        return [
            group
            for group, patterns in FUNCTIONAL_GROUPS.items()
            if any(pattern.lower() in lowered for pattern in patterns)
        ]
