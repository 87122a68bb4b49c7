"""
Forming-atom resolution for interstitial voids.

A void on the face or edge of the displayed cell is enclosed partly by atoms
of neighboring cells, so the candidate pool is generated over a block of
cells around the origin, deduplicated by coordinate, and each void takes its
k nearest atoms from that pool.
"""

import logging
from typing import Sequence

import numpy as np

from crystal_voids.models import Atom, CrystalVoid, LatticeType, Point, VoidType
from crystal_voids.core.atoms import cell_atoms
from crystal_voids.core.voids import labeled_void_sites


logger = logging.getLogger(__name__)

# Quantization used to merge atoms generated by adjacent cells
DEFAULT_DECIMALS = 3


def neighbor_pool(lattice: LatticeType, span: int = 1) -> list[Atom]:
    """
    Concatenate the atoms of every cell in {-span..span}^3.

    Cells are visited with the x offset outermost, then y, then z. The result
    still contains the coincident atoms of shared corners and faces.
    """
    offsets = range(-span, span + 1)
    atoms = []
    for dx in offsets:
        for dy in offsets:
            for dz in offsets:
                atoms.extend(cell_atoms(lattice, dx, dy, dz))
    return atoms


def deduplicate_atoms(
    atoms: Sequence[Atom],
    decimals: int = DEFAULT_DECIMALS,
) -> list[Atom]:
    """
    Keep the first atom at each quantized position.

    Args:
        atoms: Atoms in generation order
        decimals: Number of decimal places compared

    Returns:
        Atoms with unique positions, order preserved

    Raises:
        ValueError: If decimals is too coarse to separate quarter-cell offsets
    """
    if decimals < 2:
        raise ValueError(f"decimals must be at least 2, got {decimals}")

    scale = 10 ** decimals
    seen = set()
    unique = []

    for atom in atoms:
        key = (
            round(atom.x * scale),
            round(atom.y * scale),
            round(atom.z * scale),
        )
        if key not in seen:
            seen.add(key)
            unique.append(atom)

    return unique


def _positions(atoms: Sequence[Point]) -> np.ndarray:
    return np.array([a.as_tuple() for a in atoms], dtype=float).reshape(-1, 3)


def nearest_atoms(point: Point, pool: Sequence[Atom], count: int) -> list[Atom]:
    """
    The `count` pooled atoms closest to a point.

    Ties keep pool order, so the result is deterministic.
    """
    distances = np.linalg.norm(_positions(pool) - np.array(point.as_tuple()), axis=1)
    order = np.argsort(distances, kind="stable")[:count]
    return [pool[i] for i in order]


def resolve(
    sites: Sequence[tuple[str, Point]],
    lattice: LatticeType,
    void_type: VoidType,
    decimals: int = DEFAULT_DECIMALS,
) -> list[CrystalVoid]:
    """
    Attach forming atoms to each void site.

    The number of forming atoms depends only on the void type (4 for
    tetrahedral, 6 for octahedral). Atoms are ranked by distance without a
    cutoff, so BCC octahedral voids mix their near and far shells.

    Args:
        sites: (void id, position) pairs
        lattice: Lattice used to build the neighbor pool
        void_type: Void type of every site
        decimals: Deduplication precision

    Returns:
        Resolved voids in site order
    """
    raw = neighbor_pool(lattice)
    pool = deduplicate_atoms(raw, decimals=decimals)
    logger.debug(
        "%s neighbor pool: %d atoms, %d after deduplication",
        lattice.value, len(raw), len(pool),
    )

    count = void_type.coordination
    voids = []
    for void_id, point in sites:
        voids.append(CrystalVoid(
            x=point.x, y=point.y, z=point.z,
            id=void_id,
            type=void_type,
            forming_atoms=tuple(nearest_atoms(point, pool, count)),
        ))
    return voids


def generate_voids(lattice: LatticeType, void_type: VoidType) -> list[CrystalVoid]:
    """
    Void sites of the displayed cell with resolved forming atoms.

    The neighbor pool is always rebuilt over the surrounding 27 cells; the
    displayed cell's atoms alone cannot enclose voids on its boundary.
    """
    return resolve(labeled_void_sites(lattice, void_type), lattice, void_type)
