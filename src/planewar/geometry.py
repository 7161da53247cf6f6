"""Plane-shape geometry.

A plane is a fixed 10-cell shape anchored on its head cell::

        H            H  head
    W W B W W        B  body
        T            W  wing
      S T S          T  tail
                     S  stabilizer

The drawing above is the ``UP`` orientation (nose toward row 0). The other
orientations are the same shape turned so the nose points right, down or
left; the anchor is always the head, which is also the first footprint cell.
"""

from __future__ import annotations

import enum
from typing import Tuple

from .coord_utils import in_bounds, index_to_rowcol, is_cell, rowcol_to_index

Footprint = Tuple[int, ...]

EMPTY_FOOTPRINT: Footprint = ()


class Orientation(int, enum.Enum):
    """Direction the nose points, in degrees clockwise from up."""

    UP = 0
    RIGHT = 90
    DOWN = 180
    LEFT = 270

    def rotated(self) -> "Orientation":
        """Return the orientation one 90° step clockwise."""
        return Orientation((self.value + 90) % 360)


class PlaneRole(enum.Enum):
    HEAD = "head"
    BODY = "body"
    WING = "wing"
    TAIL = "tail"
    STABILIZER = "stabilizer"


# Role of each footprint position, in emission order.
FOOTPRINT_ROLES: Tuple[PlaneRole, ...] = (
    PlaneRole.HEAD,
    PlaneRole.BODY,
    PlaneRole.WING,
    PlaneRole.WING,
    PlaneRole.WING,
    PlaneRole.WING,
    PlaneRole.TAIL,
    PlaneRole.TAIL,
    PlaneRole.STABILIZER,
    PlaneRole.STABILIZER,
)

# (row, col) offsets from the head for the UP orientation, same order as
# FOOTPRINT_ROLES.
_UP_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, 0),
    (1, 0),
    (1, -2),
    (1, -1),
    (1, 1),
    (1, 2),
    (2, 0),
    (3, 0),
    (3, -1),
    (3, 1),
)


def _turn(dr: int, dc: int, orientation: Orientation) -> Tuple[int, int]:
    if orientation is Orientation.UP:
        return dr, dc
    if orientation is Orientation.RIGHT:
        return dc, -dr
    if orientation is Orientation.DOWN:
        return -dr, dc
    return dc, dr


OFFSETS: dict[Orientation, Tuple[Tuple[int, int], ...]] = {
    o: tuple(_turn(dr, dc, o) for dr, dc in _UP_OFFSETS) for o in Orientation
}


def footprint(anchor: int, orientation: Orientation | int) -> Footprint:
    """Return the 10 cells of a plane headed at *anchor*, or ``()``.

    An empty tuple means the shape would leave the grid (or *anchor* is not
    a cell at all). A non-empty result always holds exactly 10
    distinct in-bounds indices, head first.
    """
    if not is_cell(anchor):
        return EMPTY_FOOTPRINT
    try:
        orientation = Orientation(orientation)
    except ValueError:
        return EMPTY_FOOTPRINT
    row, col = index_to_rowcol(anchor)
    cells = []
    for dr, dc in OFFSETS[orientation]:
        r, c = row + dr, col + dc
        if not in_bounds(r, c):
            return EMPTY_FOOTPRINT
        cells.append(rowcol_to_index(r, c))
    return tuple(cells)


def head_of(cells: Footprint) -> int | None:
    """Return the head cell of a footprint, or None for an empty one."""
    return cells[0] if cells else None
