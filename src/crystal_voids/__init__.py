"""
crystal_voids - Interstitial void geometry for FCC and BCC crystal lattices

Generates one cubic unit cell, its tetrahedral or octahedral void sites, and
the atoms (including those of neighboring cells) that enclose each void.

Example usage:
    >>> from crystal_voids import LatticeType, VoidType, StructureCache, build_structure
    >>> cache = StructureCache()
    >>> structure = build_structure(LatticeType.FCC, VoidType.TETRAHEDRAL, cache)
    >>> len(structure.atoms), len(structure.voids)
    (14, 8)
"""

# Models
from crystal_voids.models import (
    # Enums
    LatticeType,
    VoidType,
    AtomVariant,
    # Structure data
    Point,
    Atom,
    CrystalVoid,
    StructureData,
)

# Core functionality
from crystal_voids.core.atoms import (
    cell_atoms,
    generate_structure,
)

from crystal_voids.core.voids import (
    VOID_SITE_COUNTS,
    labeled_void_sites,
    void_sites,
)

from crystal_voids.core.neighbors import (
    neighbor_pool,
    deduplicate_atoms,
    nearest_atoms,
    resolve,
    generate_voids,
)

# Pipelines and exploration
from crystal_voids.pipelines import (
    StructureCache,
    StructureError,
    build_structure,
    coerce_lattice,
    coerce_void_type,
    iter_configurations,
)

from crystal_voids.session import VoidExplorer

# Explanations
from crystal_voids.explanation import (
    Explanation,
    ExplanationConfig,
    ExplanationError,
    build_prompt,
    canned_explanation,
    request_explanation,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Enums
    "LatticeType",
    "VoidType",
    "AtomVariant",
    # Structure
    "Point",
    "Atom",
    "CrystalVoid",
    "StructureData",
    # Atom generation
    "cell_atoms",
    "generate_structure",
    # Void sites
    "VOID_SITE_COUNTS",
    "labeled_void_sites",
    "void_sites",
    # Neighbor resolution
    "neighbor_pool",
    "deduplicate_atoms",
    "nearest_atoms",
    "resolve",
    "generate_voids",
    # Pipelines
    "StructureCache",
    "StructureError",
    "build_structure",
    "coerce_lattice",
    "coerce_void_type",
    "iter_configurations",
    "VoidExplorer",
    # Explanations
    "Explanation",
    "ExplanationConfig",
    "ExplanationError",
    "build_prompt",
    "canned_explanation",
    "request_explanation",
]
