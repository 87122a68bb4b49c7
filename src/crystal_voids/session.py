"""
Interactive exploration state: the current configuration and selected void.

Selection-only interactions reuse the cached snapshot; changing the lattice or
void type clears the selection since void ids differ between configurations.
"""

from typing import Optional

from crystal_voids.models import Atom, CrystalVoid, LatticeType, StructureData, VoidType
from crystal_voids.pipelines import (
    StructureCache,
    StructureError,
    build_structure,
    coerce_lattice,
    coerce_void_type,
)


# Tolerance for matching displayed atoms against forming atoms
MATCH_TOL = 1e-3


class VoidExplorer:
    """Current (lattice, void type) and the selected void of a viewer."""

    def __init__(
        self,
        lattice: LatticeType | str = LatticeType.FCC,
        void_type: VoidType | str = VoidType.TETRAHEDRAL,
        cache: Optional[StructureCache] = None,
    ):
        self.lattice = coerce_lattice(lattice)
        self.void_type = coerce_void_type(void_type)
        self.cache = cache if cache is not None else StructureCache()
        self.selected_void_id: Optional[str] = None

    @property
    def structure(self) -> StructureData:
        return build_structure(self.lattice, self.void_type, self.cache)

    @property
    def selected_void(self) -> Optional[CrystalVoid]:
        return self.structure.find_void(self.selected_void_id)

    def set_lattice(self, lattice: LatticeType | str):
        self.lattice = coerce_lattice(lattice)
        self.selected_void_id = None

    def set_void_type(self, void_type: VoidType | str):
        self.void_type = coerce_void_type(void_type)
        self.selected_void_id = None

    def select_void(self, void_id: Optional[str]) -> Optional[CrystalVoid]:
        """
        Select a void, or deselect it when it is already selected.

        Args:
            void_id: Id of a void in the current structure, or None to clear

        Returns:
            The selected void after the toggle, or None

        Raises:
            StructureError: If the id is not a void of the current structure
        """
        if void_id is None or void_id == self.selected_void_id:
            self.selected_void_id = None
            return None

        void = self.structure.find_void(void_id)
        if void is None:
            raise StructureError(
                f"No void {void_id!r} in {self.structure.title}"
            )
        self.selected_void_id = void_id
        return void

    def highlighted_atom_ids(self) -> set[str]:
        """Ids of displayed-cell atoms that enclose the selected void."""
        void = self.selected_void
        if void is None:
            return set()
        return {
            atom.id
            for atom in self.structure.atoms
            if any(_coincide(atom, fa) for fa in void.forming_atoms)
        }

    def external_atoms(self) -> list[Atom]:
        """Forming atoms of the selected void outside the displayed cell."""
        void = self.selected_void
        if void is None:
            return []
        return void.external_atoms(MATCH_TOL)


def _coincide(a: Atom, b: Atom) -> bool:
    return (
        abs(a.x - b.x) < MATCH_TOL
        and abs(a.y - b.y) < MATCH_TOL
        and abs(a.z - b.z) < MATCH_TOL
    )
