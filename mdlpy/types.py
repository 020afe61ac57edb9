"""
Core molecular data types.

This module defines the immutable records produced by the molfile parser:
Atom, Bond and Molecule. Attributes that the reader does not perceive
(rings, aromaticity, stereo, isotopes, radicals) are declared with their
default values so a later perception step can fill them in with
dataclasses.replace() without changing the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .elements import BondType


@dataclass(frozen=True, slots=True)
class Bond:
    """Represents a chemical bond between two atoms.

    Attributes:
        idx: Index of this bond in the molecule.
        atom1_idx: 0-based index of the first atom.
        atom2_idx: 0-based index of the second atom.
        bond_type: Bond type from the molfile bond-order code.
        ring_count: Number of rings containing this bond (not perceived).
        is_aromatic: Aromatic flag (not perceived).
        is_query_aromatic: Potentially aromatic in a query structure.
        topology: Ring/chain topology code (not read).
        stereo: Stereo code (not perceived).
        mdl_stereo: Stereo code as written in the file (not read).
    """

    idx: int
    atom1_idx: int
    atom2_idx: int
    bond_type: BondType = BondType.SINGLE

    # Not perceived by the reader
    ring_count: int = 0
    is_aromatic: bool = False
    is_query_aromatic: bool = False
    topology: int = 0
    stereo: int = 0
    mdl_stereo: int = 0

    def other_atom(self, atom_idx: int) -> int:
        """Get the index of the atom on the other end of this bond.

        Args:
            atom_idx: Index of one atom in the bond.

        Returns:
            Index of the other atom.

        Raises:
            ValueError: If atom_idx is not part of this bond.
        """
        if atom_idx == self.atom1_idx:
            return self.atom2_idx
        if atom_idx == self.atom2_idx:
            return self.atom1_idx
        raise ValueError(f"Atom {atom_idx} not in bond {self.idx}")

    def __contains__(self, atom_idx: int) -> bool:
        """Check if atom is part of this bond."""
        return atom_idx in (self.atom1_idx, self.atom2_idx)


@dataclass(frozen=True, slots=True)
class Atom:
    """Represents an atom read from a molfile.

    Attributes:
        idx: Index of this atom in the molecule; bonds refer to it.
        element: Element symbol exactly as read.
        atom_type: Normalized MDL atom type (e.g. "C3", "O2", "DU").
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
        formal_charge: Charge field rounded half away from zero.
        real_charge: Charge field as read, unrounded.
        valence: Default valence of the element.
        heavy: True for every atom that is not hydrogen.

    The remaining fields keep their defaults until ring, aromaticity and
    stereo perception exist.
    """

    idx: int
    element: str
    atom_type: str
    x: float
    y: float
    z: float
    formal_charge: int = 0
    real_charge: float = 0.0
    valence: int = 0
    heavy: bool = False

    # Not perceived by the reader
    explicit_hydrogens: int = 0
    total_hydrogens: int = 0
    neighbor_count: int = 0
    ring_count: int = 0
    is_aromatic: bool = False
    is_query_aromatic: bool = False
    stereo_care: bool = False
    metal: bool = False
    nucleon_number: int = 0
    radical_type: int = 0
    tag: bool = False

    @property
    def coordinates(self) -> tuple[float, float, float]:
        """Cartesian coordinates as an (x, y, z) tuple."""
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Molecule:
    """A molecule loaded from a molfile.

    Besides the atom and bond sequences, the record keeps the aggregates
    computed while parsing. All of them can be re-derived from the
    sequences.

    Attributes:
        name: First header line.
        comment: Third header line.
        num_carbons: Atoms whose symbol is exactly "C".
        num_oxygens: Atoms whose symbol is exactly "O".
        num_nitrogens: Atoms whose symbol is exactly "N".
        num_heavy_atoms: Atoms flagged heavy.
        num_heavy_bonds: Bonds whose two endpoints are heavy.
        atoms: Atoms in file order.
        bonds: Bonds in file order.

    Example:
        >>> mol = loads(block)
        >>> mol.num_heavy_atoms, mol.num_heavy_bonds
        (2, 1)
    """

    name: str = ""
    comment: str = ""
    num_carbons: int = 0
    num_oxygens: int = 0
    num_nitrogens: int = 0
    num_heavy_atoms: int = 0
    num_heavy_bonds: int = 0
    atoms: tuple[Atom, ...] = ()
    bonds: tuple[Bond, ...] = ()

    def __len__(self) -> int:
        """Return number of atoms."""
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        """Iterate over atoms."""
        return iter(self.atoms)

    def __getitem__(self, idx: int) -> Atom:
        """Get atom by index."""
        return self.atoms[idx]

    @property
    def num_atoms(self) -> int:
        """Number of atoms in the molecule."""
        return len(self.atoms)

    @property
    def num_bonds(self) -> int:
        """Number of bonds in the molecule."""
        return len(self.bonds)

    def heavy_atoms(self) -> list[Atom]:
        """Atoms flagged heavy, in file order."""
        return [atom for atom in self.atoms if atom.heavy]

    def get_bond_between(self, atom1_idx: int, atom2_idx: int) -> Bond | None:
        """Find the bond between two atoms.

        Args:
            atom1_idx: Index of the first atom.
            atom2_idx: Index of the second atom.

        Returns:
            First matching Bond in file order, None if the atoms are not bonded.
        """
        for bond in self.bonds:
            if atom1_idx in bond and atom2_idx in bond:
                return bond
        return None

    def neighbors(self, atom_idx: int) -> Iterator[int]:
        """Iterate over indices of atoms bonded to atom_idx."""
        for bond in self.bonds:
            if atom_idx in bond:
                yield bond.other_atom(atom_idx)

    def coordinates(self) -> np.ndarray:
        """Get coordinates of all atoms.

        Returns:
            Float array of shape (num_atoms, 3).
        """
        if not self.atoms:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([atom.coordinates for atom in self.atoms], dtype=np.float64)
