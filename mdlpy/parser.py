"""
MDL molfile parser.

This module reads the connection table of a molfile (the first record of an
SD file) into an immutable Molecule.

Layout read by the parser:
    line 1            molecule name
    line 2            program/timestamp line, ignored
    line 3            comment
    line 4            counts: n_atoms n_bonds [ignored fields]
    next n_atoms      x y z element charge [ignored fields]
    next n_bonds      atom1 atom2 bond_code [ignored fields]

Fields are whitespace separated. Anything after the bond block (property
lines, "M  END", SD data items) is ignored.
"""

from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass
from typing import IO, Final, Union

from .elements import (
    ElementSymbol,
    bond_type_from_code,
    convert_mdl_type,
    get_valence,
    is_heavy_atom,
)
from .exceptions import MolfileReadError, ParseError, UnsupportedElementError
from .types import Atom, Bond, Molecule

logger = logging.getLogger(__name__)

Source = Union[str, os.PathLike, IO[str]]

# ASCII whitespace only; NBSP and other Unicode spaces stay inside a field
_FIELD = re.compile(r"[^ \t\n\f\r]+")

# Decimal or exponent literal with ASCII digits, or inf/infinity/nan
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParserOptions:
    """Options controlling molfile parsing.

    Attributes:
        allow_self_bonds: Accept bonds whose two endpoints are the same atom.
        encoding: Text encoding used when load() opens a path or reads a
            binary stream.
    """

    allow_self_bonds: bool = False
    encoding: str = "utf-8"


DEFAULT_OPTIONS: Final[ParserOptions] = ParserOptions()


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Python's round() rounds ties to even, which would turn a charge of 2.5
    into 2; molfile charges round 2.5 to 3 and -1.5 to -2.
    """
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


class _LineReader:
    r"""Sequential access to the lines of a molfile.

    Lines end at "\n" only, with a trailing "\r" dropped. Other characters
    that str.splitlines() treats as breaks such as form feed or U+0085 stay
    inside the line. Tracks the 1-based number of the line last consumed so
    errors can point at it.
    """

    __slots__ = ("_lines", "_pos")

    def __init__(self, text: str) -> None:
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        self._lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        self._pos = 0

    @property
    def line_number(self) -> int:
        """1-based number of the line last returned by next()."""
        return self._pos

    def next(self, phase: str) -> str:
        """Consume and return the next line.

        Args:
            phase: Parser phase, reported if the line is missing.

        Raises:
            ParseError: If the input has no more lines.
        """
        if self._pos >= len(self._lines):
            raise ParseError(
                f"Unexpected end of input, expected line {self._pos + 1}",
                phase=phase,
            )
        line = self._lines[self._pos]
        self._pos += 1
        return line


class MolfileParser:
    """Molfile connection-table parser.

    The five phases (name, comment, counts, atoms, bonds) run in a fixed
    order and consume a fixed number of lines each. Every call to parse()
    starts again from the first line.

    Example:
        >>> parser = MolfileParser(text)
        >>> mol = parser.parse()
        >>> mol.num_atoms
        2

    For convenience, use the module-level `load()` and `loads()` functions:
        >>> from mdlpy import load
        >>> mol = load("ethanol.mol")
    """

    def __init__(self, text: str, options: ParserOptions | None = None) -> None:
        """Initialize parser with molfile text.

        Args:
            text: Complete molfile contents.
            options: Parser options, defaults to DEFAULT_OPTIONS.
        """
        self._text = text
        self._reader = _LineReader(text)
        self._options = options or DEFAULT_OPTIONS

    def parse(self) -> Molecule:
        """Parse the molfile into a Molecule.

        Returns:
            Parsed Molecule object.

        Raises:
            ParseError: If a line is missing or a field is malformed.
            UnsupportedElementError: If an element has no known valence.
        """
        reader = self._reader = _LineReader(self._text)

        name = reader.next("header").strip()
        reader.next("header")
        comment = reader.next("header").strip()

        n_atoms, n_bonds = self._parse_counts(reader.next("counts"))
        logger.debug("Parsing %r: %d atoms, %d bonds", name, n_atoms, n_bonds)

        atoms = tuple(self._parse_atom(idx) for idx in range(n_atoms))
        bonds = tuple(self._parse_bond(idx, n_atoms) for idx in range(n_bonds))

        heavy_bonds = sum(
            1 for bond in bonds
            if atoms[bond.atom1_idx].heavy and atoms[bond.atom2_idx].heavy
        )

        mol = Molecule(
            name=name,
            comment=comment,
            num_carbons=sum(1 for atom in atoms if atom.element == "C"),
            num_oxygens=sum(1 for atom in atoms if atom.element == "O"),
            num_nitrogens=sum(1 for atom in atoms if atom.element == "N"),
            num_heavy_atoms=sum(1 for atom in atoms if atom.heavy),
            num_heavy_bonds=heavy_bonds,
            atoms=atoms,
            bonds=bonds,
        )
        logger.debug(
            "Parsed %r: %d heavy atoms, %d heavy bonds",
            name, mol.num_heavy_atoms, mol.num_heavy_bonds,
        )
        return mol

    def _parse_counts(self, line: str) -> tuple[int, int]:
        tokens = _FIELD.findall(line)
        n_atoms = self._unsigned(tokens, 0, "n_atoms", "counts", line)
        n_bonds = self._unsigned(tokens, 1, "n_bonds", "counts", line)
        return n_atoms, n_bonds

    def _parse_atom(self, idx: int) -> Atom:
        line = self._reader.next("atoms")
        tokens = _FIELD.findall(line)

        x = self._float(tokens, 0, "x", "atoms", line)
        y = self._float(tokens, 1, "y", "atoms", line)
        z = self._float(tokens, 2, "z", "atoms", line)
        symbol = ElementSymbol(self._token(tokens, 3, "element", "atoms", line))
        charge = self._float(tokens, 4, "charge", "atoms", line)
        if not math.isfinite(charge):
            raise self._error(f"Charge must be finite, got {charge}", "atoms", "charge", line)

        try:
            valence = get_valence(symbol.valence_key)
        except UnsupportedElementError:
            raise UnsupportedElementError(symbol.raw, self._reader.line_number) from None

        return Atom(
            idx=idx,
            element=symbol.raw,
            atom_type=convert_mdl_type(symbol.type_key),
            x=x,
            y=y,
            z=z,
            formal_charge=round_half_away(charge),
            real_charge=charge,
            valence=valence,
            heavy=is_heavy_atom(symbol.raw),
        )

    def _parse_bond(self, idx: int, n_atoms: int) -> Bond:
        line = self._reader.next("bonds")
        tokens = _FIELD.findall(line)

        atom1 = self._atom_ref(tokens, 0, "atom1", n_atoms, line)
        atom2 = self._atom_ref(tokens, 1, "atom2", n_atoms, line)
        code = self._token(tokens, 2, "bond_type", "bonds", line)

        if atom1 == atom2 and not self._options.allow_self_bonds:
            raise self._error(f"Bond connects atom {atom1 + 1} to itself", "bonds", "atom2", line)

        try:
            bond_type = bond_type_from_code(code)
        except ParseError as e:
            raise self._error(e.message, "bonds", "bond_type", line) from None

        return Bond(idx=idx, atom1_idx=atom1, atom2_idx=atom2, bond_type=bond_type)

    def _atom_ref(self, tokens: list[str], pos: int, field: str, n_atoms: int, line: str) -> int:
        """Read a 1-based atom reference and return it 0-based."""
        number = self._unsigned(tokens, pos, field, "bonds", line)
        if not 1 <= number <= n_atoms:
            raise self._error(
                f"Atom index {number} out of range 1..{n_atoms}", "bonds", field, line
            )
        return number - 1

    def _token(self, tokens: list[str], pos: int, field: str, phase: str, line: str) -> str:
        if pos >= len(tokens):
            raise self._error(f"Missing field '{field}'", phase, field, line)
        return tokens[pos]

    def _unsigned(self, tokens: list[str], pos: int, field: str, phase: str, line: str) -> int:
        token = self._token(tokens, pos, field, phase, line)
        # isdigit() alone accepts non-ASCII digits such as "²"
        if not (token.isascii() and token.isdigit()):
            raise self._error(
                f"Field '{field}' is not an unsigned integer: {token!r}", phase, field, line
            )
        return int(token)

    def _float(self, tokens: list[str], pos: int, field: str, phase: str, line: str) -> float:
        token = self._token(tokens, pos, field, phase, line)
        # float() alone also takes "1_000" and non-ASCII digits
        if not _FLOAT_LITERAL.fullmatch(token):
            raise self._error(
                f"Field '{field}' is not a number: {token!r}", phase, field, line
            )
        return float(token)

    def _error(self, message: str, phase: str, field: str, line: str) -> ParseError:
        return ParseError(
            message,
            phase=phase,
            line_number=self._reader.line_number,
            field=field,
            line=line,
        )


def loads(text: str, options: ParserOptions | None = None) -> Molecule:
    """Parse molfile text into a Molecule.

    Args:
        text: Molfile contents.
        options: Parser options.

    Returns:
        Parsed Molecule object.

    Raises:
        ParseError: If the text is not a valid connection table.
        UnsupportedElementError: If an element has no known valence.
    """
    return MolfileParser(text, options).parse()


def load(source: Source, options: ParserOptions | None = None) -> Molecule:
    """Read a molfile from a path or open text stream.

    Args:
        source: File path, or any object with a read() method returning str
            or bytes.
        options: Parser options.

    Returns:
        Parsed Molecule object.

    Raises:
        MolfileReadError: If the file or stream cannot be read or decoded.
        ParseError: If the contents are not a valid connection table.
        UnsupportedElementError: If an element has no known valence.

    Example:
        >>> mol = load("caffeine.mol")
        >>> mol.num_heavy_atoms
        14
    """
    options = options or DEFAULT_OPTIONS

    if hasattr(source, "read"):
        return loads(_read_stream(source, options), options)

    path = os.fspath(source)
    logger.debug("Reading molfile %s", path)
    try:
        with open(path, encoding=options.encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MolfileReadError(f"Cannot read molfile ({e.__class__.__name__})", path) from e
    return loads(text, options)


def _read_stream(stream: IO, options: ParserOptions) -> str:
    """Read a whole stream, decoding bytes with options.encoding."""
    name = getattr(stream, "name", None)
    path = None if name is None else str(name)
    try:
        data = stream.read()
        if isinstance(data, bytes):
            data = data.decode(options.encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise MolfileReadError(f"Cannot read molfile ({e.__class__.__name__})", path) from e
    if not isinstance(data, str):
        raise MolfileReadError(f"Stream returned {type(data).__name__}, expected str", path)
    return data
