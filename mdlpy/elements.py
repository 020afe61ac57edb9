"""
Chemical property tables.

This module provides the element lookups used to type atoms read from a
molfile: default valences, heavy-atom classification, MDL atom-type
normalization and the bond-order code table.

Two symbol domains are in play. The valence table is keyed by upper-case
symbols ("CL", "NA") while the atom-type table is keyed by symbols as they
are usually written in molfiles ("Cl", "Na"). ElementSymbol produces both
keys from a raw token so callers never have to re-case by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, FrozenSet

from .exceptions import ParseError, UnsupportedElementError


class BondType(str, Enum):
    """Bond type enumeration.

    Values are the single-character codes used for bond typing; the
    molfile digit is translated by bond_type_from_code().
    """

    SINGLE = "S"
    DOUBLE = "D"
    TRIPLE = "T"
    AROMATIC = "A"
    SINGLE_OR_DOUBLE = "l"
    SINGLE_OR_AROMATIC = "s"
    DOUBLE_OR_AROMATIC = "d"
    ANY = "a"

    def __str__(self) -> str:
        return self.name.lower()


# Default valences, keyed by upper-case symbol
VALENCES: Final[dict[str, int]] = {
    "H": 1,
    "D": 1,   # deuterium
    "C": 4,
    "N": 3,
    "O": 2,
    "S": 2,
    "SE": 2,
    "TE": 2,
    "P": 3,
    "F": 1,
    "CL": 1,
    "BR": 1,
    "I": 1,
    "B": 3,
    "LI": 1,
    "NA": 1,
    "K": 1,
    "CA": 2,
    "SR": 2,
    "MG": 2,
    "FE": 3,
    "MN": 2,
    "HG": 2,
    "SI": 4,
    "SN": 4,
    "ZN": 2,
    "CU": 2,
    "A": 4,   # query: any atom
    "Q": 4,   # query: any heteroatom
}

# MDL element symbol -> normalized atom type
MDL_ATOM_TYPES: Final[dict[str, str]] = {
    "H": "H",
    "C": "C3",
    "O": "O2",
    "N": "N3",
    "F": "F",
    "Cl": "CL",
    "Br": "BR",
    "I": "I",
    "Al": "AL",
    "ANY": "A",
    "Ca": "CA",
    "Du": "DU",
    "K": "K",
    "Li": "LI",
    "LP": "LP",
    "Na": "NA",
    "S": "S3",
    "Si": "SI",
    "P": "P4",
    "A": "A",
    "Q": "Q",
}

DUMMY_ATOM_TYPE: Final[str] = "DU"

# Pseudo atoms whose atom-type key is spelled in upper case
UPPERCASE_PSEUDO_ATOMS: Final[FrozenSet[str]] = frozenset({"ANY", "LP"})

# Molfile bond-order digit -> bond type
BOND_CODES: Final[dict[str, BondType]] = {
    "1": BondType.SINGLE,
    "2": BondType.DOUBLE,
    "3": BondType.TRIPLE,
    "4": BondType.AROMATIC,
    "5": BondType.SINGLE_OR_DOUBLE,
    "6": BondType.SINGLE_OR_AROMATIC,
    "7": BondType.DOUBLE_OR_AROMATIC,
    "8": BondType.ANY,
    "9": BondType.ANY,  # alternate "any" code written by some editors
}


@dataclass(frozen=True, slots=True)
class ElementSymbol:
    """An element token with its two lookup projections.

    Attributes:
        raw: The symbol exactly as read from the file.
    """

    raw: str

    @property
    def valence_key(self) -> str:
        """Upper-case key for the valence table (e.g. "Cl" -> "CL")."""
        return self.raw.upper()

    @property
    def type_key(self) -> str:
        """Key for the atom-type table (e.g. "CL" -> "Cl", "lp" -> "LP")."""
        upper = self.raw.upper()
        if upper in UPPERCASE_PSEUDO_ATOMS:
            return upper
        return self.raw.capitalize()

    def __str__(self) -> str:
        return self.raw


def get_valence(symbol: str) -> int:
    """Get the default valence for an element.

    Args:
        symbol: Upper-case element symbol (e.g. "C", "CL", "NA").

    Returns:
        Default valence.

    Raises:
        UnsupportedElementError: If the symbol is not in the valence table.
    """
    try:
        return VALENCES[symbol]
    except KeyError:
        raise UnsupportedElementError(symbol) from None


def is_heavy_atom(symbol: str) -> bool:
    """Check if an element counts as a heavy atom (anything but "H")."""
    return symbol != "H"


def convert_mdl_type(symbol: str) -> str:
    """Normalize an MDL element symbol to an atom type.

    Args:
        symbol: Element symbol as written in molfiles (e.g. "C", "Cl", "Na").

    Returns:
        Atom type code, or DUMMY_ATOM_TYPE for unknown symbols.
    """
    return MDL_ATOM_TYPES.get(symbol, DUMMY_ATOM_TYPE)


def bond_type_from_code(code: str) -> BondType:
    """Translate a molfile bond-order code into a BondType.

    Args:
        code: Bond-order token, "1" through "9".

    Returns:
        The matching BondType.

    Raises:
        ParseError: If the code is not one of "1" through "9".
    """
    try:
        return BOND_CODES[code]
    except KeyError:
        raise ParseError(f"Invalid bond order code {code!r}", field="bond_type") from None
