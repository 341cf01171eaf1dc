"""Single-pass parser turning SMILES text into a MolecularGraph."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..exceptions import SmilesSyntaxError
from ..models.atom import Atom
from ..models.bond import Bond, BondType
from ..models.molecular_graph import MolecularGraph

logger = logging.getLogger(__name__)

ATOMIC_NUMBERS = {
    "H": 1,
    "B": 5,
    "C": 6,
    "N": 7,
    "O": 8,
    "F": 9,
    "SI": 14,
    "P": 15,
    "S": 16,
    "CL": 17,
    "BR": 35,
    "I": 53,
}

BOND_SYMBOLS = {
    "-": BondType.SINGLE,
    "=": BondType.DOUBLE,
    "#": BondType.TRIPLE,
    ":": BondType.AROMATIC,
    # Directional single bonds; cis/trans is not modelled.
    "/": BondType.SINGLE,
    "\\": BondType.SINGLE,
}

_BRACKET_ELEMENT = re.compile(r"[A-Z][a-z]?|[a-z]")
_HYDROGEN_COUNT = re.compile(r"H(\d?)")
_CHARGE = re.compile(r"([+-])(\d?)$")
_DIGITS = frozenset("0123456789")


def atomic_number(symbol: str) -> int:
    """Atomic number from the small element table, 0 when unlisted."""
    return ATOMIC_NUMBERS.get(symbol.upper(), 0)


@dataclass
class _RingOpening:
    atom_id: int
    bond_type: Optional[BondType]
    position: int


class SmilesParser:
    """Parser for the SMILES subset used throughout the project.

    The scan keeps a cursor on the last placed atom, a pending bond kind,
    a stack of cursors for branches and the open ring labels. By default
    malformed input is absorbed: an unmatched ``)`` or ``[`` is skipped, a
    ring label that is never closed is dropped and unknown characters are
    ignored. With ``strict=True`` each of these raises SmilesSyntaxError.
    """

    def __init__(self, strict: bool = False):
        """
        Initialize parser.

        Args:
            strict: Raise SmilesSyntaxError instead of skipping malformed input
        """
        self.strict = strict

    def parse(self, smiles: Optional[str]) -> MolecularGraph:
        """
        Parse SMILES text.

        Args:
            smiles: SMILES string; blank input gives an empty molecule

        Returns:
            MolecularGraph with atom and bond ids numbered from 0
        """
        molecule = MolecularGraph()
        if smiles is None or not smiles.strip():
            return molecule

        text = smiles.strip()
        current: Optional[int] = None
        pending: Optional[BondType] = None
        branch_stack: List[int] = []
        open_rings: Dict[int, _RingOpening] = {}
        next_atom_id = 0

        i = 0
        while i < len(text):
            c = text[i]

            if c == "(":
                if current is None:
                    self._recover(text, i, "Branch opened before any atom")
                else:
                    branch_stack.append(current)

            elif c == ")":
                if branch_stack:
                    current = branch_stack.pop()
                else:
                    self._recover(text, i, "Unmatched ')'")

            elif c in BOND_SYMBOLS:
                pending = BOND_SYMBOLS[c]

            elif c == ".":
                current = None
                pending = None

            elif c == "[":
                end = text.find("]", i)
                if end < 0:
                    self._recover(text, i, "Unmatched '['")
                else:
                    atom = self._parse_bracket_atom(text[i + 1 : end], next_atom_id)
                    if atom is None:
                        self._recover(text, i, "No element symbol in bracket atom")
                    else:
                        next_atom_id += 1
                        self._place_atom(molecule, atom, current, pending)
                        current = atom.atom_id
                        pending = None
                    i = end

            elif c.isascii() and c.isalpha():
                symbol = c
                # Greedy: "Cl" and "Br", but also "Cc" or "Oc" read as one atom.
                if c.isupper() and i + 1 < len(text) and text[i + 1].islower():
                    symbol += text[i + 1]
                    i += 1
                atom = Atom(
                    atom_id=next_atom_id,
                    symbol=symbol,
                    atomic_number=atomic_number(symbol),
                )
                next_atom_id += 1
                self._place_atom(molecule, atom, current, pending)
                current = atom.atom_id
                pending = None

            elif c in _DIGITS or c == "%":
                label, i = self._read_ring_label(text, i)
                if label is not None:
                    self._handle_ring_label(
                        molecule, text, i, label, current, pending, open_rings
                    )
                pending = None

            else:
                self._recover(text, i, f"Unexpected character '{c}'")

            i += 1

        for label, opening in open_rings.items():
            self._recover(text, opening.position, f"Ring label {label} never closed")

        return molecule

    def _place_atom(
        self,
        molecule: MolecularGraph,
        atom: Atom,
        current: Optional[int],
        pending: Optional[BondType],
    ) -> None:
        """Add the atom and bond it to the cursor atom, if any."""
        molecule.add_atom(atom)
        if current is not None:
            molecule.add_bond(
                Bond(
                    bond_id=len(molecule.bonds),
                    atom1_id=current,
                    atom2_id=atom.atom_id,
                    bond_type=pending or BondType.SINGLE,
                )
            )

    def _read_ring_label(self, text: str, i: int) -> Tuple[Optional[int], int]:
        """Read a ring label at ``i``; returns (label, index of its last char)."""
        if text[i] != "%":
            return int(text[i]), i
        digits = text[i + 1 : i + 3]
        if len(digits) == 2 and set(digits) <= _DIGITS:
            return int(digits), i + 2
        self._recover(text, i, "'%' must be followed by two digits")
        return None, i

    def _handle_ring_label(
        self,
        molecule: MolecularGraph,
        text: str,
        position: int,
        label: int,
        current: Optional[int],
        pending: Optional[BondType],
        open_rings: Dict[int, _RingOpening],
    ) -> None:
        if current is None:
            self._recover(text, position, f"Ring label {label} before any atom")
            return

        opening = open_rings.pop(label, None)
        if opening is None:
            open_rings[label] = _RingOpening(current, pending, position)
            return

        if opening.atom_id == current:
            self._recover(text, position, f"Ring label {label} closes on its own atom")
            return

        molecule.add_bond(
            Bond(
                bond_id=len(molecule.bonds),
                atom1_id=opening.atom_id,
                atom2_id=current,
                bond_type=pending or opening.bond_type or BondType.SINGLE,
            )
        )

    def _parse_bracket_atom(self, content: str, atom_id: int) -> Optional[Atom]:
        """Decode the text between ``[`` and ``]``, e.g. ``NH4+`` or ``C@@H``."""
        match = _BRACKET_ELEMENT.search(content)
        if match is None:
            return None

        symbol = match.group(0)
        rest = content[match.end() :]
        atom = Atom(atom_id=atom_id, symbol=symbol, atomic_number=atomic_number(symbol))

        if "@@" in content:
            atom.is_chiral_center = True
            atom.chiral_configuration = "R"
        elif "@" in content:
            atom.is_chiral_center = True
            atom.chiral_configuration = "S"

        hydrogens = _HYDROGEN_COUNT.search(rest)
        if hydrogens:
            atom.implicit_hydrogens = int(hydrogens.group(1) or 1)

        charge = _CHARGE.search(rest)
        if charge:
            sign = 1 if charge.group(1) == "+" else -1
            atom.formal_charge = sign * int(charge.group(2) or 1)

        return atom

    def _recover(self, text: str, position: int, message: str) -> None:
        if self.strict:
            raise SmilesSyntaxError(message, text, position)
        logger.debug(f"Ignoring malformed SMILES input: {message} (position {position})")
