"""
Data models for crystal lattices and their interstitial voids.

This module defines the enums and immutable dataclasses shared by the
structure generators, the exploration session and the renderer. All
coordinates are expressed in fractions of the cubic unit cell, not Angstroms.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class LatticeType(Enum):
    """Cubic Bravais lattices with interstitial void tables."""
    FCC = "FCC"
    BCC = "BCC"


class VoidType(Enum):
    """Interstitial void categories."""
    TETRAHEDRAL = "Tetrahedral"
    OCTAHEDRAL = "Octahedral"

    @property
    def coordination(self) -> int:
        """Number of atoms enclosing a void of this type."""
        return 4 if self is VoidType.TETRAHEDRAL else 6


class AtomVariant(Enum):
    """Position of an atom within its generating cell (descriptive only)."""
    CORNER = "corner"
    FACE = "face"
    BODY = "body"


# ============================================================================
# Geometry
# ============================================================================

@dataclass(frozen=True)
class Point:
    """Position in unit-cell-fraction space."""
    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def in_unit_cell(self, tol: float = 1e-3) -> bool:
        """Whether the point lies inside [0, 1]^3, with a small tolerance."""
        return all(-tol < value < 1.0 + tol for value in self.as_tuple())


@dataclass(frozen=True)
class Atom(Point):
    """Lattice atom.

    The id is only unique within the cell that generated it; atoms shared by
    neighboring cells carry different ids but identical coordinates.
    """
    id: str = ""
    variant: AtomVariant = AtomVariant.CORNER


@dataclass(frozen=True)
class CrystalVoid(Point):
    """Interstitial site together with the atoms that enclose it."""
    id: str = ""
    type: VoidType = VoidType.TETRAHEDRAL
    forming_atoms: tuple[Atom, ...] = ()

    @property
    def is_resolved(self) -> bool:
        return len(self.forming_atoms) == self.type.coordination

    def external_atoms(self, tol: float = 1e-3) -> list[Atom]:
        """Forming atoms that belong to a neighboring cell."""
        return [atom for atom in self.forming_atoms if not atom.in_unit_cell(tol)]


# ============================================================================
# Structure Data
# ============================================================================

@dataclass(frozen=True)
class StructureData:
    """Snapshot of one displayed unit cell and its resolved voids."""
    lattice: LatticeType
    void_type: VoidType
    atoms: tuple[Atom, ...] = field(default_factory=tuple)
    voids: tuple[CrystalVoid, ...] = field(default_factory=tuple)

    @property
    def title(self) -> str:
        return f"{self.lattice.value} {self.void_type.value.lower()} voids"

    def find_void(self, void_id: Optional[str]) -> Optional[CrystalVoid]:
        """Look up a void by id; returns None for unknown or missing ids."""
        if void_id is None:
            return None
        return next((v for v in self.voids if v.id == void_id), None)
