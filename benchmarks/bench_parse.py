#!/usr/bin/env python3
"""
Benchmark script comparing molfile parsing speed between RDKit and mdlpy.

Usage:
    python benchmarks/bench_parse.py [--extended]

Options:
    --extended    Run every test molecule and print a comparison table
"""

import sys
import os
import time
from dataclasses import dataclass
from typing import Optional

# Ensure local mdlpy is used (not installed version)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

ITERATIONS = 2000
EXTENDED_ITERATIONS = 500


def alkane_molfile(n_carbons: int) -> str:
    """Build a V2000 block for a straight-chain alkane with explicit hydrogens."""
    atoms = []
    bonds = []
    carbons = []
    for i in range(n_carbons):
        atoms.append(("C", 1.54 * i, 0.0, 0.0))
        carbons.append(len(atoms))
        hydrogens = 4 if n_carbons == 1 else 3 if i in (0, n_carbons - 1) else 2
        for h in range(hydrogens):
            atoms.append(("H", 1.54 * i, 1.09 * (h - 1), 0.5))
            bonds.append((carbons[-1], len(atoms)))
    bonds += list(zip(carbons, carbons[1:]))

    lines = [
        f"C{n_carbons}H{2 * n_carbons + 2}",
        "  bench",
        "",
        f"{len(atoms):3d}{len(bonds):3d}  0  0  0  0  0  0  0  0999 V2000",
    ]
    # Fifth field is 0 so RDKit (mass difference) and mdlpy (charge) agree
    for symbol, x, y, z in atoms:
        lines.append(f"{x:10.4f}{y:10.4f}{z:10.4f} {symbol:<3} 0  0  0  0  0  0  0  0  0  0  0  0")
    for a1, a2 in bonds:
        lines.append(f"{a1:3d}{a2:3d}  1  0  0  0  0")
    lines.append("M  END")
    return "\n".join(lines) + "\n"


# Atom counts must stay below 1000 for V2000 fixed columns
TEST_MOLECULES = {
    "methane": alkane_molfile(1),
    "decane": alkane_molfile(10),
    "triacontane": alkane_molfile(30),
    "hectane": alkane_molfile(100),
}

LARGE_MOLECULE = TEST_MOLECULES["hectane"]


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    name: str
    time_seconds: float
    iterations: int
    num_atoms: int
    num_bonds: int

    @property
    def time_per_call_ms(self) -> float:
        return (self.time_seconds / self.iterations) * 1000

    @property
    def time_per_atom_us(self) -> float:
        """Microseconds per atom per call."""
        return (self.time_seconds / self.iterations / self.num_atoms) * 1_000_000


def benchmark_rdkit(name: str, block: str, iterations: int) -> BenchmarkResult:
    """Benchmark RDKit MolFromMolBlock."""
    from rdkit import Chem

    mol = Chem.MolFromMolBlock(block, removeHs=False)
    if mol is None:
        raise ValueError(f"RDKit failed to parse {name}")

    start = time.perf_counter()
    for _ in range(iterations):
        Chem.MolFromMolBlock(block, removeHs=False)
    end = time.perf_counter()

    return BenchmarkResult(
        name=name,
        time_seconds=end - start,
        iterations=iterations,
        num_atoms=mol.GetNumAtoms(),
        num_bonds=mol.GetNumBonds(),
    )


def benchmark_mdlpy(name: str, block: str, iterations: int) -> BenchmarkResult:
    """Benchmark mdlpy.loads."""
    from mdlpy import loads

    mol = loads(block)

    start = time.perf_counter()
    for _ in range(iterations):
        loads(block)
    end = time.perf_counter()

    return BenchmarkResult(
        name=name,
        time_seconds=end - start,
        iterations=iterations,
        num_atoms=mol.num_atoms,
        num_bonds=mol.num_bonds,
    )


def run_one(name: str, block: str, iterations: int) -> tuple[Optional[BenchmarkResult], Optional[BenchmarkResult]]:
    rdkit_result: Optional[BenchmarkResult] = None
    mdlpy_result: Optional[BenchmarkResult] = None

    try:
        rdkit_result = benchmark_rdkit(name, block, iterations)
    except ImportError:
        print("  RDKit: SKIPPED (rdkit not installed)")

    mdlpy_result = benchmark_mdlpy(name, block, iterations)
    return rdkit_result, mdlpy_result


def run_single_benchmark():
    """Run basic single-molecule benchmark."""
    print("=" * 70)
    print("Molfile Parsing Benchmark: RDKit vs mdlpy")
    print("=" * 70)
    print(f"\nIterations: {ITERATIONS}")

    rdkit_result, mdlpy_result = run_one("hectane", LARGE_MOLECULE, ITERATIONS)
    if rdkit_result:
        print(f"RDKit: {rdkit_result.time_per_call_ms:.3f} ms per call")
    print(f"mdlpy: {mdlpy_result.time_per_call_ms:.3f} ms per call "
          f"({mdlpy_result.num_atoms} atoms, {mdlpy_result.num_bonds} bonds)")

    if rdkit_result:
        ratio = mdlpy_result.time_seconds / rdkit_result.time_seconds
        if ratio < 1:
            print(f"\nmdlpy is {1/ratio:.2f}x FASTER than RDKit")
        else:
            print(f"\nmdlpy is {ratio:.2f}x SLOWER than RDKit")


def run_extended_benchmark():
    """Run every test molecule and print a comparison table."""
    print("=" * 78)
    print("EXTENDED Molfile Parsing Benchmark: RDKit vs mdlpy")
    print("=" * 78)
    print(f"\nIterations per molecule: {EXTENDED_ITERATIONS}\n")

    header = f"{'Molecule':<14} {'Atoms':>6} {'Bonds':>6} {'RDKit ms':>10} {'mdlpy ms':>10} {'Ratio':>8} {'µs/atom':>10}"
    print(header)
    print("-" * 78)

    for name, block in TEST_MOLECULES.items():
        rdkit_res, mdlpy_res = run_one(name, block, EXTENDED_ITERATIONS)
        rdkit_ms = f"{rdkit_res.time_per_call_ms:>10.4f}" if rdkit_res else f"{'N/A':>10}"
        ratio = (
            f"{mdlpy_res.time_seconds / rdkit_res.time_seconds:.2f}x" if rdkit_res else "N/A"
        )
        print(f"{name:<14} "
              f"{mdlpy_res.num_atoms:>6} "
              f"{mdlpy_res.num_bonds:>6} "
              f"{rdkit_ms} "
              f"{mdlpy_res.time_per_call_ms:>10.4f} "
              f"{ratio:>8} "
              f"{mdlpy_res.time_per_atom_us:>10.2f}")


def main():
    if "--extended" in sys.argv or "-e" in sys.argv:
        run_extended_benchmark()
    else:
        run_single_benchmark()
        print("\n" + "-" * 70)
        print("TIP: Run with --extended for the multi-molecule table")


if __name__ == "__main__":
    main()
