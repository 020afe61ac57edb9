"""
Custom exceptions for the mdlpy library.

Every failure raised while loading a molfile derives from ChemError, so a
caller can catch a single type per load and still tell I/O, format and
chemistry problems apart.
"""

from __future__ import annotations


class ChemError(Exception):
    """Base exception for all chemistry-related errors."""

    pass


class MolfileReadError(ChemError):
    """The molfile source could not be read.

    Attributes:
        path: Path of the file that failed to open or decode.
        message: Description of what went wrong.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path

        if path is not None:
            super().__init__(f"{message}: {path}")
        else:
            super().__init__(message)


class ParseError(ChemError):
    """Error during molfile parsing.

    Attributes:
        message: Description of what went wrong.
        phase: Parser phase that failed ("header", "counts", "atoms", "bonds").
        line_number: 1-based line number, or None if the line is missing.
        field: Name of the offending field, if known.
        line: Raw text of the offending line, if present.
    """

    def __init__(
        self,
        message: str,
        phase: str | None = None,
        line_number: int | None = None,
        field: str | None = None,
        line: str | None = None,
    ) -> None:
        self.message = message
        self.phase = phase
        self.line_number = line_number
        self.field = field
        self.line = line

        # Build detailed error message
        parts = [message]
        if phase is not None and line_number is not None:
            parts.append(f" ({phase}, line {line_number})")
        elif phase is not None:
            parts.append(f" ({phase})")
        if line is not None:
            parts.append(f"\n  {line}")

        super().__init__("".join(parts))


class UnsupportedElementError(ChemError):
    """Element symbol has no entry in the valence table.

    Attributes:
        symbol: The unsupported element symbol.
        line_number: 1-based line of the atom record, when raised by the parser.
    """

    def __init__(self, symbol: str, line_number: int | None = None) -> None:
        self.symbol = symbol
        self.line_number = line_number

        message = f"Unsupported element for valence lookup: {symbol!r}"
        if line_number is not None:
            message += f" (line {line_number})"
        super().__init__(message)
