"""
Atom generation for cubic unit cells.

Cells are addressed by integer offsets; the cell at (0, 0, 0) spans [0, 1]^3
and is the one displayed. Neighboring cells are generated independently, so
atoms on shared corners and faces appear once per generating cell.
"""

from crystal_voids.models import Atom, AtomVariant, LatticeType


# Face-center basis (label, fractional position), in emission order
FACE_CENTERS = [
    ("xy-0", (0.5, 0.5, 0.0)),
    ("xy-1", (0.5, 0.5, 1.0)),
    ("yz-0", (0.0, 0.5, 0.5)),
    ("yz-1", (1.0, 0.5, 0.5)),
    ("xz-0", (0.5, 0.0, 0.5)),
    ("xz-1", (0.5, 1.0, 0.5)),
]

BODY_CENTER = (0.5, 0.5, 0.5)


def cell_atoms(
    lattice: LatticeType,
    offset_x: int,
    offset_y: int,
    offset_z: int,
) -> list[Atom]:
    """
    Generate the atoms of a single unit cell.

    Args:
        lattice: FCC or BCC
        offset_x: Cell index along x
        offset_y: Cell index along y
        offset_z: Cell index along z

    Returns:
        8 corner atoms, followed by 6 face atoms (FCC) or 1 body atom (BCC)
    """
    atoms = []

    for i in (0, 1):
        for j in (0, 1):
            for k in (0, 1):
                x, y, z = offset_x + i, offset_y + j, offset_z + k
                atoms.append(Atom(
                    x=float(x), y=float(y), z=float(z),
                    id=f"c-{x}-{y}-{z}",
                    variant=AtomVariant.CORNER,
                ))

    cell = f"{offset_x}-{offset_y}-{offset_z}"

    if lattice is LatticeType.FCC:
        for label, (fx, fy, fz) in FACE_CENTERS:
            atoms.append(Atom(
                x=offset_x + fx, y=offset_y + fy, z=offset_z + fz,
                id=f"f-{label}-{cell}",
                variant=AtomVariant.FACE,
            ))
    elif lattice is LatticeType.BCC:
        bx, by, bz = BODY_CENTER
        atoms.append(Atom(
            x=offset_x + bx, y=offset_y + by, z=offset_z + bz,
            id=f"b-0-{cell}",
            variant=AtomVariant.BODY,
        ))

    return atoms


def generate_structure(lattice: LatticeType) -> list[Atom]:
    """Atoms of the displayed unit cell at offset (0, 0, 0)."""
    return cell_atoms(lattice, 0, 0, 0)
