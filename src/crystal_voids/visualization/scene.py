"""
Static 3D rendering of a unit cell, its voids and the selected void's
forming atoms.
"""
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import matplotlib

from crystal_voids.models import Atom, CrystalVoid, StructureData, VoidType

matplotlib.use('Agg')

ATOM_RADIUS = 0.2
VOID_RADIUS = 0.08

COLORS = {
    "atom": "#f97316",
    "atom_highlight": "#fbbf24",
    "void_tetra": "#f472b6",
    "void_octa": "#38bdf8",
    "connector": "#ffffff",
    "frame": "#666666",
    "background": "#0f172a",
}

# Scatter marker area per unit of fractional radius
MARKER_SCALE = 150.0

CELL_EDGES = [
    ((0, 0, 0), (1, 0, 0)), ((1, 0, 0), (1, 1, 0)),
    ((1, 1, 0), (0, 1, 0)), ((0, 1, 0), (0, 0, 0)),
    ((0, 0, 1), (1, 0, 1)), ((1, 0, 1), (1, 1, 1)),
    ((1, 1, 1), (0, 1, 1)), ((0, 1, 1), (0, 0, 1)),
    ((0, 0, 0), (0, 0, 1)), ((1, 0, 0), (1, 0, 1)),
    ((1, 1, 0), (1, 1, 1)), ((0, 1, 0), (0, 1, 1)),
]


def _marker_size(radius: float) -> float:
    return (radius * MARKER_SCALE) ** 2


def _void_color(void: CrystalVoid) -> str:
    return COLORS["void_tetra"] if void.type is VoidType.TETRAHEDRAL else COLORS["void_octa"]


def _scatter_atoms(ax, atoms: list[Atom], color: str, scale: float = 1.0):
    if not atoms:
        return
    ax.scatter(
        [a.x for a in atoms], [a.y for a in atoms], [a.z for a in atoms],
        s=_marker_size(ATOM_RADIUS * scale), c=color,
        edgecolors="black", linewidths=0.5, depthshade=True,
    )


def render_structure(
    structure: StructureData,
    selected_void_id: Optional[str] = None,
    output_path: Optional[Path] = None,
):
    """
    Draw the displayed cell with its voids.

    Args:
        structure: Structure snapshot to draw
        selected_void_id: Void whose forming atoms and connectors are drawn
        output_path: If given, the figure is saved there

    Returns:
        The matplotlib Figure
    """
    selected = structure.find_void(selected_void_id)
    forming = selected.forming_atoms if selected else ()

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111, projection='3d')
    ax.set_facecolor(COLORS["background"])
    fig.patch.set_facecolor(COLORS["background"])

    for start, end in CELL_EDGES:
        ax.plot(*zip(start, end), color=COLORS["frame"], linewidth=2)

    def is_forming(atom: Atom) -> bool:
        return any(atom.distance_to(fa) < 1e-3 for fa in forming)

    _scatter_atoms(ax, [a for a in structure.atoms if not is_forming(a)], COLORS["atom"])
    _scatter_atoms(ax, [a for a in structure.atoms if is_forming(a)], COLORS["atom_highlight"], 1.1)

    # Forming atoms from neighboring cells are not part of the displayed cell
    if selected:
        _scatter_atoms(ax, selected.external_atoms(), COLORS["atom_highlight"], 1.1)

    for void in structure.voids:
        scale = 1.6 if selected is not None and void.id == selected.id else 1.0
        ax.scatter(
            [void.x], [void.y], [void.z],
            s=_marker_size(VOID_RADIUS * scale), c=_void_color(void),
            edgecolors="white" if scale > 1.0 else "none",
        )

    if selected:
        for atom in forming:
            ax.plot(
                [selected.x, atom.x], [selected.y, atom.y], [selected.z, atom.z],
                color=COLORS["connector"], linewidth=2, alpha=0.8,
            )

    ax.set_xlabel('x'); ax.set_ylabel('y'); ax.set_zlabel('z')
    ax.set_box_aspect((1, 1, 1))
    ax.set_title(structure.title, color="white", fontweight='bold')

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=200, bbox_inches='tight', facecolor=fig.get_facecolor())

    return fig
