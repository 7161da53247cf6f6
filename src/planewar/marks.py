"""Local three-state marks on the opponent grid.

Marks are advisory notes for the player only and are never sent to the
server. Each right-click on an unfired cell cycles::

    (none) -> NEXT_TARGET -> PLANNED_HIT -> (none)
"""

from __future__ import annotations

import enum
from typing import Mapping


class Mark(enum.Enum):
    NEXT_TARGET = "nextTarget"
    PLANNED_HIT = "plannedHit"


MarkMap = Mapping[int, Mark]

_NEXT: dict[Mark | None, Mark | None] = {
    None: Mark.NEXT_TARGET,
    Mark.NEXT_TARGET: Mark.PLANNED_HIT,
    Mark.PLANNED_HIT: None,
}


def next_mark(current: Mark | None) -> Mark | None:
    return _NEXT[current]


def cycle(cell: int, marks: MarkMap, shots: frozenset[int] | set[int] = frozenset()) -> dict[int, Mark]:
    """Return a new mark map with *cell* advanced one step.

    A cell in *shots* has already been fired at and keeps no mark; the map
    comes back unchanged (as a copy).
    """
    updated = dict(marks)
    if cell in shots:
        return updated
    mark = next_mark(updated.get(cell))
    if mark is None:
        updated.pop(cell, None)
    else:
        updated[cell] = mark
    return updated


def evict(cell: int, marks: MarkMap) -> dict[int, Mark]:
    """Return a copy of *marks* without *cell*; firing supersedes a mark."""
    updated = dict(marks)
    updated.pop(cell, None)
    return updated
