"""Plane removal by flood fill.

A plane's cells are found again from the grid itself: starting at the
clicked cell, walk every 8-neighbour that carries the same plane id.
Wing and stabilizer cells sit diagonally next to each other across
orientations, so 4-neighbour adjacency is not enough.
"""

from __future__ import annotations

import logging

from .coord_utils import in_bounds, index_to_rowcol, is_cell, rowcol_to_index
from .placement import OwnGrid, clear

logger = logging.getLogger(__name__)

_NEIGHBOURS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]


def neighbours(index: int):
    """Yield the in-bounds 8-neighbours of *index*."""
    row, col = index_to_rowcol(index)
    for dr, dc in _NEIGHBOURS:
        r, c = row + dr, col + dc
        if in_bounds(r, c):
            yield rowcol_to_index(r, c)


def connected_region(grid: OwnGrid, start: int) -> set[int]:
    """Return every cell reachable from *start* through cells of its plane id.

    Empty if *start* is not a cell or is open sky.
    """
    if not is_cell(start):
        return set()
    plane_id = grid[start]
    if plane_id is None:
        return set()

    region: set[int] = set()
    stack = [start]
    while stack:
        pos = stack.pop()
        if pos in region:
            continue
        region.add(pos)
        for nxt in neighbours(pos):
            if nxt not in region and grid[nxt] == plane_id:
                stack.append(nxt)
    return region


def retract(grid: OwnGrid, clicked: int) -> tuple[OwnGrid, set[int]]:
    """Clear the plane under *clicked*; return ``(new_grid, removed_cells)``.

    A click on open sky returns the grid unchanged and an empty set.
    """
    removed = connected_region(grid, clicked)
    if not removed:
        return grid, removed
    logger.debug("retracting plane %s: %d cells", grid[clicked], len(removed))
    return clear(grid, removed), removed
