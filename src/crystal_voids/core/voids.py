"""
Canonical interstitial site tables for FCC and BCC unit cells.

Sites are listed in fractional coordinates of the displayed cell, including
the ones on its faces and edges that are shared with neighboring cells.
"""

from crystal_voids.models import LatticeType, Point, VoidType


# Midpoints of the 12 cube edges
EDGE_CENTERS = [
    (0.5, 0.0, 0.0), (0.0, 0.5, 0.0), (0.0, 0.0, 0.5),
    (0.5, 1.0, 1.0), (1.0, 0.5, 1.0), (1.0, 1.0, 0.5),
    (0.5, 1.0, 0.0), (0.5, 0.0, 1.0),
    (0.0, 1.0, 0.5), (0.0, 0.5, 1.0),
    (1.0, 0.5, 0.0), (1.0, 0.0, 0.5),
]

# Centers of the 6 cube faces
FACE_CENTERS = [
    (0.5, 0.5, 0.0), (0.5, 0.5, 1.0),
    (0.5, 0.0, 0.5), (0.5, 1.0, 0.5),
    (0.0, 0.5, 0.5), (1.0, 0.5, 0.5),
]

VOID_SITE_COUNTS = {
    (LatticeType.FCC, VoidType.OCTAHEDRAL): 13,
    (LatticeType.FCC, VoidType.TETRAHEDRAL): 8,
    (LatticeType.BCC, VoidType.OCTAHEDRAL): 18,
    (LatticeType.BCC, VoidType.TETRAHEDRAL): 24,
}


def _fcc_octahedral() -> list[tuple[str, Point]]:
    sites = [("v-oct-body", Point(0.5, 0.5, 0.5))]
    for i, (x, y, z) in enumerate(EDGE_CENTERS):
        sites.append((f"v-oct-edge-{i}", Point(x, y, z)))
    return sites


def _fcc_tetrahedral() -> list[tuple[str, Point]]:
    sites = []
    for x in (0.25, 0.75):
        for y in (0.25, 0.75):
            for z in (0.25, 0.75):
                sites.append((f"v-tet-{x}-{y}-{z}", Point(x, y, z)))
    return sites


def _bcc_octahedral() -> list[tuple[str, Point]]:
    sites = []
    for i, (x, y, z) in enumerate(FACE_CENTERS):
        sites.append((f"v-bcc-oct-face-{i}", Point(x, y, z)))
    for i, (x, y, z) in enumerate(EDGE_CENTERS):
        sites.append((f"v-bcc-oct-edge-{i}", Point(x, y, z)))
    return sites


def _bcc_tetrahedral() -> list[tuple[str, Point]]:
    # Four sites per face: +-0.25 from the face center along each in-plane axis
    in_plane = [(0.5, 0.25), (0.5, 0.75), (0.25, 0.5), (0.75, 0.5)]
    sites = []

    for z in (0.0, 1.0):
        for n, (x, y) in enumerate(in_plane, start=1):
            sites.append((f"vbcc-tet-z{int(z)}-{n}", Point(x, y, z)))
    for x in (0.0, 1.0):
        for n, (z, y) in enumerate(in_plane, start=1):
            sites.append((f"vbcc-tet-x{int(x)}-{n}", Point(x, y, z)))
    for y in (0.0, 1.0):
        for n, (z, x) in enumerate(in_plane, start=1):
            sites.append((f"vbcc-tet-y{int(y)}-{n}", Point(x, y, z)))

    return sites


SITE_TABLES = {
    (LatticeType.FCC, VoidType.OCTAHEDRAL): _fcc_octahedral,
    (LatticeType.FCC, VoidType.TETRAHEDRAL): _fcc_tetrahedral,
    (LatticeType.BCC, VoidType.OCTAHEDRAL): _bcc_octahedral,
    (LatticeType.BCC, VoidType.TETRAHEDRAL): _bcc_tetrahedral,
}


def labeled_void_sites(
    lattice: LatticeType,
    void_type: VoidType,
) -> list[tuple[str, Point]]:
    """
    Void sites of the displayed cell paired with their stable ids.

    Args:
        lattice: FCC or BCC
        void_type: Tetrahedral or octahedral

    Returns:
        List of (void id, position) tuples
    """
    return SITE_TABLES[(lattice, void_type)]()


def void_sites(lattice: LatticeType, void_type: VoidType) -> list[Point]:
    """Void site coordinates of the displayed cell."""
    return [point for _, point in labeled_void_sites(lattice, void_type)]
