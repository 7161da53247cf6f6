"""Placement validation on the own grid."""

from planewar.geometry import Orientation, footprint
from planewar.placement import EMPTY_GRID, assign, clear, next_plane_id, plane_cells, plane_ids, validate


def test_valid_footprint_on_empty_grid():
    assert validate(footprint(55, Orientation.UP), EMPTY_GRID)


def test_empty_footprint_rejected():
    assert not validate((), EMPTY_GRID)
    assert not validate(footprint(9, Orientation.UP), EMPTY_GRID)


def test_overlap_rejected():
    grid = assign(EMPTY_GRID, footprint(55, Orientation.UP), 1)
    # Overlaps the first plane along its body column.
    assert not validate(footprint(75, Orientation.DOWN), grid)


def test_single_shared_cell_is_enough_to_reject():
    grid = assign(EMPTY_GRID, [67], 2)
    cells = footprint(47, Orientation.UP)
    assert 67 in cells
    assert not validate(cells, grid)


def test_malformed_footprints_rejected():
    cells = footprint(55, Orientation.UP)
    assert not validate(cells[:9], EMPTY_GRID)
    assert not validate(cells[:9] + (cells[0],), EMPTY_GRID)
    assert not validate(cells[:9] + (100,), EMPTY_GRID)


def test_assign_and_clear_do_not_mutate():
    cells = footprint(55, Orientation.UP)
    grid = assign(EMPTY_GRID, cells, 1)
    assert EMPTY_GRID == (None,) * 100
    assert plane_cells(grid, 1) == set(cells)
    assert clear(grid, set(cells)) == EMPTY_GRID


def test_next_plane_id_is_lowest_free():
    assert next_plane_id(EMPTY_GRID) == 1
    grid = assign(EMPTY_GRID, footprint(2, Orientation.UP), 1)
    grid = assign(grid, footprint(7, Orientation.UP), 2)
    assert next_plane_id(grid) == 3
    grid = clear(grid, plane_cells(grid, 1))
    assert plane_ids(grid) == {2}
    assert next_plane_id(grid) == 1
    grid = assign(grid, footprint(2, Orientation.UP), 1)
    grid = assign(grid, footprint(42, Orientation.UP), 3)
    assert next_plane_id(grid) is None
