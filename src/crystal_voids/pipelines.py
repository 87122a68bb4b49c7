"""
High-level structure pipeline.

This module composes atom generation and void resolution into a single
StructureData snapshot and memoizes snapshots in a caller-owned cache.
"""

import logging
from itertools import product
from typing import Iterator, Optional

from crystal_voids.models import LatticeType, StructureData, VoidType
from crystal_voids.core.atoms import generate_structure
from crystal_voids.core.neighbors import generate_voids


logger = logging.getLogger(__name__)


class StructureError(ValueError):
    """Raised for unknown lattice, void type or void id labels."""


def coerce_lattice(value: LatticeType | str) -> LatticeType:
    """Accept a LatticeType or its label ("FCC", "bcc")."""
    if isinstance(value, LatticeType):
        return value
    try:
        return LatticeType(str(value).upper())
    except ValueError:
        raise StructureError(f"Unknown lattice type: {value!r}") from None


def coerce_void_type(value: VoidType | str) -> VoidType:
    """Accept a VoidType or its label ("Octahedral", "tetrahedral")."""
    if isinstance(value, VoidType):
        return value
    try:
        return VoidType(str(value).capitalize())
    except ValueError:
        raise StructureError(f"Unknown void type: {value!r}") from None


def iter_configurations() -> Iterator[tuple[LatticeType, VoidType]]:
    """All (lattice, void type) pairs."""
    return product(LatticeType, VoidType)


class StructureCache:
    """
    Memo of StructureData snapshots keyed by (lattice, void type).

    Snapshots are immutable, so cached objects are shared between callers
    that hold the same cache.
    """

    def __init__(self):
        self._entries: dict[tuple[LatticeType, VoidType], StructureData] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[LatticeType, VoidType]) -> bool:
        return key in self._entries

    def get(self, lattice: LatticeType, void_type: VoidType) -> Optional[StructureData]:
        structure = self._entries.get((lattice, void_type))
        if structure is None:
            self.misses += 1
        else:
            self.hits += 1
        return structure

    def put(self, structure: StructureData) -> StructureData:
        self._entries[(structure.lattice, structure.void_type)] = structure
        return structure

    def clear(self):
        self._entries.clear()
        self.hits = 0
        self.misses = 0


def build_structure(
    lattice: LatticeType | str,
    void_type: VoidType | str,
    cache: Optional[StructureCache] = None,
) -> StructureData:
    """
    Build the displayed cell and its resolved voids.

    Args:
        lattice: Lattice type or its label
        void_type: Void type or its label
        cache: Optional cache; without one the snapshot is always recomputed

    Returns:
        StructureData for the requested configuration

    Raises:
        StructureError: If a label is not a known lattice or void type

    Example:
        >>> cache = StructureCache()
        >>> structure = build_structure("FCC", "Octahedral", cache)
        >>> len(structure.voids)
        13
    """
    lattice = coerce_lattice(lattice)
    void_type = coerce_void_type(void_type)

    if cache is not None:
        cached = cache.get(lattice, void_type)
        if cached is not None:
            logger.debug("Cache hit for %s/%s", lattice.value, void_type.value)
            return cached

    logger.debug("Building %s/%s structure", lattice.value, void_type.value)
    structure = StructureData(
        lattice=lattice,
        void_type=void_type,
        atoms=tuple(generate_structure(lattice)),
        voids=tuple(generate_voids(lattice, void_type)),
    )

    if cache is not None:
        cache.put(structure)
    return structure
