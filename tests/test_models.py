"""
Tests for data models module.
"""

import dataclasses
import math

import pytest

from crystal_voids import (
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


def test_enum_values():
    """Test enum labels match the names used by callers."""
    assert LatticeType("FCC") is LatticeType.FCC
    assert LatticeType("BCC") is LatticeType.BCC
    assert VoidType("Tetrahedral") is VoidType.TETRAHEDRAL
    assert VoidType("Octahedral") is VoidType.OCTAHEDRAL
    assert AtomVariant("face") is AtomVariant.FACE

    print("test_enum_values passed")


def test_void_type_coordination():
    """Test coordination number is determined by void type."""
    assert VoidType.TETRAHEDRAL.coordination == 4
    assert VoidType.OCTAHEDRAL.coordination == 6

    print("test_void_type_coordination passed")


def test_point_distance():
    """Test Euclidean distance between points."""
    a = Point(0.0, 0.0, 0.0)
    b = Point(0.25, 0.25, 0.25)

    assert a.distance_to(b) == pytest.approx(math.sqrt(3) / 4)
    assert b.distance_to(a) == pytest.approx(a.distance_to(b))
    assert a.distance_to(a) == 0.0

    print("test_point_distance passed")


def test_point_in_unit_cell():
    """Test unit cell membership including boundary tolerance."""
    assert Point(0.0, 0.0, 0.0).in_unit_cell()
    assert Point(1.0, 1.0, 1.0).in_unit_cell()
    assert Point(0.5, 0.5, 1.0005).in_unit_cell()
    assert not Point(0.5, -0.5, 0.0).in_unit_cell()
    assert not Point(1.5, 0.5, 0.5).in_unit_cell()

    print("test_point_in_unit_cell passed")


def test_atom_is_immutable():
    """Test atoms are frozen value objects."""
    atom = Atom(x=0.5, y=0.5, z=0.0, id="f-xy-0-0-0-0", variant=AtomVariant.FACE)

    with pytest.raises(dataclasses.FrozenInstanceError):
        atom.x = 1.0

    assert atom.as_tuple() == (0.5, 0.5, 0.0)

    print("test_atom_is_immutable passed")


def test_crystal_void_external_atoms():
    """Test external forming atoms are those outside the unit cell."""
    inside = Atom(x=0.0, y=0.0, z=0.0, id="c-0-0-0")
    outside = Atom(x=0.5, y=-0.5, z=0.0, id="f-xy-1-0--1-0", variant=AtomVariant.FACE)
    void = CrystalVoid(
        x=0.5, y=0.0, z=0.0,
        id="v-oct-edge-0",
        type=VoidType.OCTAHEDRAL,
        forming_atoms=(inside, outside),
    )

    assert void.external_atoms() == [outside]
    assert not void.is_resolved

    print("test_crystal_void_external_atoms passed")


def test_unresolved_void_defaults():
    """Test a void starts without forming atoms."""
    void = CrystalVoid(x=0.25, y=0.25, z=0.25, id="v")

    assert void.forming_atoms == ()
    assert void.type is VoidType.TETRAHEDRAL
    assert void.external_atoms() == []

    print("test_unresolved_void_defaults passed")


def test_structure_data_find_void():
    """Test void lookup by id."""
    void = CrystalVoid(x=0.5, y=0.5, z=0.5, id="v-oct-body", type=VoidType.OCTAHEDRAL)
    structure = StructureData(
        lattice=LatticeType.FCC,
        void_type=VoidType.OCTAHEDRAL,
        voids=(void,),
    )

    assert structure.find_void("v-oct-body") is void
    assert structure.find_void("missing") is None
    assert structure.find_void(None) is None
    assert structure.title == "FCC octahedral voids"

    print("test_structure_data_find_void passed")


def run_all_tests():
    """Run all model tests."""
    print("\n=== Testing Data Models ===\n")

    test_enum_values()
    test_void_type_coordination()
    test_point_distance()
    test_point_in_unit_cell()
    test_atom_is_immutable()
    test_crystal_void_external_atoms()
    test_unresolved_void_defaults()
    test_structure_data_find_void()

    print("\n=== All model tests passed! ===\n")


if __name__ == "__main__":
    run_all_tests()
