"""Own-grid model and plane placement checks.

The own grid is a 100-tuple: entry *i* is the id (1..3) of the plane
covering cell *i*, or ``None`` for open sky. Grids are never mutated in
place; every change returns a fresh tuple.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .config import CELL_COUNT, MAX_PLANES, PLANE_CELLS
from .coord_utils import is_cell

logger = logging.getLogger(__name__)

OwnGrid = Tuple[Optional[int], ...]

EMPTY_GRID: OwnGrid = (None,) * CELL_COUNT


def plane_ids(grid: OwnGrid) -> set[int]:
    """Return the ids of planes currently present on *grid*."""
    return {pid for pid in grid if pid is not None}


def plane_cells(grid: OwnGrid, plane_id: int) -> set[int]:
    return {i for i, pid in enumerate(grid) if pid == plane_id}


def next_plane_id(grid: OwnGrid) -> int | None:
    """Return the lowest free plane id, or None when all planes are down."""
    used = plane_ids(grid)
    for pid in range(1, MAX_PLANES + 1):
        if pid not in used:
            return pid
    return None


def validate(cells: Sequence[int], grid: OwnGrid) -> bool:
    """Return True if a plane may be placed on *cells*.

    Rejects an empty footprint, anything that is not a full set of distinct
    grid cells, and any overlap with a plane already on *grid*.
    """
    if not cells:
        return False
    if len(cells) != PLANE_CELLS or len(set(cells)) != PLANE_CELLS:
        return False
    if not all(is_cell(c) for c in cells):
        return False
    overlap = [c for c in cells if grid[c] is not None]
    if overlap:
        logger.debug("placement overlaps cells %s", overlap)
        return False
    return True


def assign(grid: OwnGrid, cells: Sequence[int], plane_id: int) -> OwnGrid:
    """Return a copy of *grid* with *cells* owned by *plane_id*."""
    members = set(cells)
    return tuple(plane_id if i in members else pid for i, pid in enumerate(grid))


def clear(grid: OwnGrid, cells: set[int]) -> OwnGrid:
    """Return a copy of *grid* with *cells* reset to open sky."""
    return tuple(None if i in cells else pid for i, pid in enumerate(grid))
