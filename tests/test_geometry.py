"""Plane footprint geometry."""

import itertools

import pytest

from planewar.geometry import FOOTPRINT_ROLES, Orientation, PlaneRole, footprint, head_of


def test_up_footprint_at_centre():
    cells = footprint(55, Orientation.UP)
    assert cells[0] == 55  # head
    assert cells[1] == 65  # body
    assert set(cells[2:6]) == {63, 64, 66, 67}
    assert set(cells[6:8]) == {75, 85}
    assert set(cells[8:]) == {84, 86}


def test_right_footprint_matches_reference_layout():
    assert footprint(55, Orientation.RIGHT) == (55, 54, 34, 44, 64, 74, 53, 52, 42, 62)


def test_down_and_left_point_the_other_way():
    assert footprint(55, Orientation.DOWN) == (55, 45, 43, 44, 46, 47, 35, 25, 24, 26)
    assert footprint(55, Orientation.LEFT) == (55, 56, 36, 46, 66, 76, 57, 58, 48, 68)


@pytest.mark.parametrize(
    "anchor,orientation",
    [
        (9, Orientation.UP),  # col + 2 off the grid
        (75, Orientation.UP),  # row + 3 off the grid
        (22, Orientation.DOWN),  # row - 3 off the grid
        (52, Orientation.RIGHT),  # col - 3 off the grid
        (15, Orientation.RIGHT),  # row - 2 off the grid
        (57, Orientation.LEFT),  # col + 3 off the grid
        (95, Orientation.LEFT),  # row + 2 off the grid
    ],
)
def test_out_of_bounds_is_empty(anchor, orientation):
    assert footprint(anchor, orientation) == ()


def test_every_anchor_and_orientation_is_full_or_empty():
    for anchor, orientation in itertools.product(range(100), Orientation):
        cells = footprint(anchor, orientation)
        if not cells:
            continue
        assert len(cells) == 10
        assert len(set(cells)) == 10
        assert all(0 <= c < 100 for c in cells)
        assert cells[0] == anchor


def test_rows_never_wrap():
    # A valid plane spans at most 5 columns; wrapping would blow that up.
    for anchor, orientation in itertools.product(range(100), Orientation):
        cells = footprint(anchor, orientation)
        if cells:
            cols = {c % 10 for c in cells}
            rows = {c // 10 for c in cells}
            assert max(cols) - min(cols) <= 4
            assert max(rows) - min(rows) <= 4


@pytest.mark.parametrize("anchor", [-1, 100, True, "55", None])
def test_non_cell_anchor_is_empty(anchor):
    assert footprint(anchor, Orientation.UP) == ()


def test_degrees_accepted_as_orientation():
    assert footprint(55, 90) == footprint(55, Orientation.RIGHT)
    assert footprint(55, 45) == ()


def test_rotation_cycles_clockwise():
    o = Orientation.UP
    seen = []
    for _ in range(4):
        o = o.rotated()
        seen.append(o)
    assert seen == [Orientation.RIGHT, Orientation.DOWN, Orientation.LEFT, Orientation.UP]


def test_roles_and_head():
    assert len(FOOTPRINT_ROLES) == 10
    assert FOOTPRINT_ROLES[0] is PlaneRole.HEAD
    assert FOOTPRINT_ROLES.count(PlaneRole.WING) == 4
    assert head_of(footprint(55, Orientation.UP)) == 55
    assert head_of(()) is None
