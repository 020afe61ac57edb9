"""
mdlpy - MDL molfile reader.

Reads the connection table of a molfile / SD record into an immutable
molecular graph with typed atoms and bonds.

    >>> from mdlpy import load
    >>> mol = load("ethanol.mol")
    >>> mol.num_heavy_atoms
    3

Modules:
    mdlpy.parser     - Molfile parser (load, loads, MolfileParser)
    mdlpy.elements   - Valence, atom-type and bond-code tables
    mdlpy.types      - Atom, Bond and Molecule records
    mdlpy.exceptions - Error hierarchy rooted at ChemError
"""

import logging

__version__ = "0.1.0"

# Core types
from mdlpy.types import Atom, Bond, Molecule

# Parsing
from mdlpy.parser import load, loads, MolfileParser, ParserOptions

# Exceptions
from mdlpy.exceptions import ChemError, MolfileReadError, ParseError, UnsupportedElementError

# Element data
from mdlpy.elements import (
    BondType,
    ElementSymbol,
    DUMMY_ATOM_TYPE,
    convert_mdl_type,
    get_valence,
    is_heavy_atom,
    bond_type_from_code,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Types
    "Atom", "Bond", "Molecule",
    # Parsing
    "load", "loads", "MolfileParser", "ParserOptions",
    # Exceptions
    "ChemError", "MolfileReadError", "ParseError", "UnsupportedElementError",
    # Elements
    "BondType", "ElementSymbol", "DUMMY_ATOM_TYPE",
    "convert_mdl_type", "get_valence", "is_heavy_atom", "bond_type_from_code",
]
