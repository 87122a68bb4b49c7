#!/usr/bin/env python3
"""
Inspect the interstitial voids of an FCC or BCC unit cell.

Prints every void of the chosen configuration with its forming atoms, and can
render the cell to an image or fetch an explanation of the void type.

Usage:
    python scripts/explore_voids.py --lattice FCC --void-type tetrahedral

    # Highlight one void and save a rendering:
    python scripts/explore_voids.py --lattice BCC --void-type octahedral \\
        --select v-bcc-oct-face-0 --render ./output/bcc_oct.png

    # Summary of all four configurations:
    python scripts/explore_voids.py --all

    # Explanation (uses GEMINI_API_KEY when set, canned text otherwise):
    python scripts/explore_voids.py --lattice FCC --void-type octahedral --explain
"""

import argparse
import logging
import sys
from pathlib import Path

from crystal_voids import (
    ExplanationError,
    LatticeType,
    StructureCache,
    StructureError,
    VoidExplorer,
    VoidType,
    build_structure,
    iter_configurations,
    request_explanation,
)


def print_voids(explorer: VoidExplorer):
    """Print a table of the current structure's voids."""
    structure = explorer.structure

    print(f"\n{structure.title}: {len(structure.atoms)} atoms, {len(structure.voids)} voids")
    print("-" * 70)
    print(f"{'Void':<22} {'Position':<22} {'Atoms':>5} {'Nearest':>9} {'External':>9}")
    print("-" * 70)

    for void in structure.voids:
        position = f"({void.x:.2f}, {void.y:.2f}, {void.z:.2f})"
        nearest = min(void.distance_to(a) for a in void.forming_atoms)
        marker = "*" if void.id == explorer.selected_void_id else " "
        print(
            f"{marker}{void.id:<21} {position:<22} {len(void.forming_atoms):>5} "
            f"{nearest:>9.4f} {len(void.external_atoms()):>9}"
        )


def print_selection(explorer: VoidExplorer):
    """Print the forming atoms of the selected void."""
    void = explorer.selected_void
    if void is None:
        return

    print(f"\nForming atoms of {void.id}:")
    for atom in void.forming_atoms:
        where = "cell" if atom.in_unit_cell() else "neighbor"
        print(
            f"  {atom.id:<20} ({atom.x:5.2f}, {atom.y:5.2f}, {atom.z:5.2f})  "
            f"d={void.distance_to(atom):.4f}  {atom.variant.value:<6} {where}"
        )


def print_summary(cache: StructureCache):
    """Print void counts and forming-atom distances for every configuration."""
    print("\nSUMMARY")
    print("=" * 60)
    print(f"{'Lattice':<8} {'Void type':<12} {'Sites':>6} {'Min d':>8} {'Max d':>8}")
    print("-" * 60)

    for lattice, void_type in iter_configurations():
        structure = build_structure(lattice, void_type, cache)
        distances = [
            void.distance_to(atom)
            for void in structure.voids
            for atom in void.forming_atoms
        ]
        print(
            f"{lattice.value:<8} {void_type.value:<12} {len(structure.voids):>6} "
            f"{min(distances):>8.4f} {max(distances):>8.4f}"
        )


def main():
    parser = argparse.ArgumentParser(
        description="Explore interstitial voids in FCC and BCC unit cells",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:")[0],
    )
    parser.add_argument(
        "--lattice",
        choices=[t.value for t in LatticeType],
        default=LatticeType.FCC.value,
        help="Lattice type (default: FCC)",
    )
    parser.add_argument(
        "--void-type",
        choices=[t.value.lower() for t in VoidType],
        default=VoidType.TETRAHEDRAL.value.lower(),
        help="Void type (default: tetrahedral)",
    )
    parser.add_argument(
        "--select",
        metavar="VOID_ID",
        help="Void to highlight",
    )
    parser.add_argument(
        "--render",
        type=Path,
        metavar="PATH",
        help="Save a 3D rendering of the cell to PATH",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print an explanation of the void type",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Print a summary of all configurations",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cache = StructureCache()

    if args.all:
        print_summary(cache)
        return

    explorer = VoidExplorer(args.lattice, args.void_type, cache=cache)

    if args.select:
        try:
            explorer.select_void(args.select)
        except StructureError as e:
            print(f"Error: {e}")
            sys.exit(1)

    print_voids(explorer)
    print_selection(explorer)

    if args.render:
        from crystal_voids.visualization.scene import render_structure

        render_structure(explorer.structure, explorer.selected_void_id, args.render)
        print(f"\nRendering saved to {args.render}")

    if args.explain:
        try:
            explanation = request_explanation(explorer.lattice, explorer.void_type)
        except ExplanationError as e:
            print(f"\nError: {e}")
            sys.exit(1)
        print(f"\n{explanation.text}")


if __name__ == "__main__":
    main()
