"""Flood-fill plane removal."""

import pytest

from planewar.geometry import Orientation, footprint
from planewar.placement import EMPTY_GRID, assign, plane_cells
from planewar.retract import connected_region, neighbours, retract

A = footprint(2, Orientation.UP)
B = footprint(7, Orientation.UP)  # wing 15 touches A's wing 14
C = footprint(42, Orientation.UP)  # head 42 sits under A's stabilizers


def _grid():
    grid = assign(EMPTY_GRID, A, 1)
    grid = assign(grid, B, 2)
    return assign(grid, C, 3)


def test_fixture_planes_touch():
    assert 15 in neighbours(14)
    assert 42 in neighbours(32)
    assert not set(A) & set(B) and not set(A) & set(C) and not set(B) & set(C)


@pytest.mark.parametrize("clicked", A)
def test_any_click_removes_exactly_that_plane(clicked):
    grid, removed = retract(_grid(), clicked)
    assert removed == set(A)
    assert plane_cells(grid, 1) == set()
    assert plane_cells(grid, 2) == set(B)
    assert plane_cells(grid, 3) == set(C)


@pytest.mark.parametrize("plane_id,cells", [(2, B), (3, C)])
def test_neighbouring_planes_are_separate_regions(plane_id, cells):
    grid = _grid()
    for cell in cells:
        assert connected_region(grid, cell) == set(cells)


def test_sideways_plane_is_removed_whole():
    cells = footprint(55, Orientation.RIGHT)
    grid = assign(EMPTY_GRID, cells, 1)
    _, removed = retract(grid, cells[-1])  # a stabilizer
    assert removed == set(cells)


def test_open_sky_is_a_no_op():
    grid = _grid()
    new_grid, removed = retract(grid, 99)
    assert removed == set()
    assert new_grid is grid


@pytest.mark.parametrize("cell", [-1, 100, None])
def test_off_grid_click_is_a_no_op(cell):
    assert connected_region(_grid(), cell) == set()


def test_corner_has_three_neighbours():
    assert sorted(neighbours(0)) == [1, 10, 11]
    assert len(list(neighbours(55))) == 8
