"""Test configuration and fixtures for mdlpy tests."""

import pytest

# RDKit is used as reference for molfile parsing
from rdkit import Chem


def make_molfile(
    atoms: list[tuple],
    bonds: list[tuple[int, int, int]],
    name: str = "",
    comment: str = "",
) -> str:
    """Build a V2000 molfile block.

    Args:
        atoms: (symbol, x, y, z) or (symbol, x, y, z, charge) tuples. The
            charge goes in the fifth field, which is where mdlpy reads it.
            In V2000 that column is the mass difference, so RDKit reads a
            nonzero value there as an isotope shift; blocks checked
            against RDKit keep it at zero.
        bonds: (atom1, atom2, code) tuples with 1-based atom numbers.
        name: Header line 1.
        comment: Header line 3.

    Returns:
        Molfile text ending with "M  END".
    """
    lines = [
        name,
        "  mdlpy             3D",
        comment,
        f"{len(atoms):3d}{len(bonds):3d}  0  0  0  0  0  0  0  0999 V2000",
    ]
    for symbol, x, y, z, *rest in atoms:
        charge = rest[0] if rest else 0
        lines.append(
            f"{x:10.4f}{y:10.4f}{z:10.4f} {symbol:<3}{charge:>2}"
            "  0  0  0  0  0  0  0  0  0  0  0"
        )
    for a1, a2, code in bonds:
        lines.append(f"{a1:3d}{a2:3d}{code:3d}  0  0  0  0")
    lines.append("M  END")
    return "\n".join(lines) + "\n"


def rdkit_mol(block: str):
    """Parse a molfile block with RDKit, keeping explicit hydrogens."""
    mol = Chem.MolFromMolBlock(block, removeHs=False)
    if mol is None:
        raise ValueError("RDKit could not parse molfile block")
    return mol


# Minimal free-format record: C at the origin double bonded to O at (1, 0, 0)
FORMALDEHYDE_MINIMAL = """\
formaldehyde

minimal
2 1
0 0 0 C 0
1 0 0 O 0
1 2 2
"""


@pytest.fixture
def formaldehyde_minimal() -> str:
    """Smallest valid record: two heavy atoms joined by a double bond."""
    return FORMALDEHYDE_MINIMAL


@pytest.fixture
def ethanol_block() -> str:
    """Ethanol with explicit hydrogens."""
    return make_molfile(
        atoms=[
            ("C", -0.8883, 0.1670, -0.0273),
            ("C", 0.4658, -0.5116, -0.0368),
            ("O", 1.4311, 0.3514, 0.4838),
            ("H", -0.8487, 1.1535, -0.5089),
            ("H", -1.6448, -0.4713, -0.4898),
            ("H", -1.1727, 0.3128, 1.0191),
            ("H", 0.7800, -0.7800, -1.0500),
            ("H", 0.4000, -1.4500, 0.5200),
            ("H", 2.2700, -0.1100, 0.5500),
        ],
        bonds=[
            (1, 2, 1),
            (2, 3, 1),
            (1, 4, 1),
            (1, 5, 1),
            (1, 6, 1),
            (2, 7, 1),
            (2, 8, 1),
            (3, 9, 1),
        ],
        name="ethanol",
        comment="explicit hydrogens",
    )


@pytest.fixture
def acetamide_block() -> str:
    """Acetamide heavy atoms only (C, C, O, N)."""
    return make_molfile(
        atoms=[
            ("C", 0.0000, 0.0000, 0.0000),
            ("C", 1.5000, 0.0000, 0.0000),
            ("O", 2.1000, 1.0400, 0.0000),
            ("N", 2.1800, -1.1700, 0.0000),
        ],
        bonds=[
            (1, 2, 1),
            (2, 3, 2),
            (2, 4, 1),
        ],
        name="acetamide",
    )


@pytest.fixture
def chloromethane_block() -> str:
    """Chloromethane with explicit hydrogens; exercises the two-letter symbol."""
    return make_molfile(
        atoms=[
            ("C", 0.0000, 0.0000, 0.0000),
            ("Cl", 1.7800, 0.0000, 0.0000),
            ("H", -0.3600, 1.0300, 0.0000),
            ("H", -0.3600, -0.5100, 0.8900),
            ("H", -0.3600, -0.5100, -0.8900),
        ],
        bonds=[
            (1, 2, 1),
            (1, 3, 1),
            (1, 4, 1),
            (1, 5, 1),
        ],
        name="chloromethane",
    )


@pytest.fixture
def reference_blocks(ethanol_block, acetamide_block, chloromethane_block) -> list[str]:
    """Molfiles that RDKit also parses, for cross-checking."""
    return [ethanol_block, acetamide_block, chloromethane_block]
