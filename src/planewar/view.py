"""Render-facing projection of a session.

The core only decides *which* marker a cell carries; how a marker looks
is up to the renderer. The text symbols here are what the CLI prints.
"""

from __future__ import annotations

import enum
from typing import List, Optional

from .config import GRID_SIZE, MAX_PLANES
from .coord_utils import rowcol_to_index
from .marks import Mark
from .session import Phase, Session


class Marker(enum.Enum):
    MISS = "miss"
    HIT = "hit"
    PLANNED_HIT = "plannedHit"
    HEAD_HIT = "headHit"
    NEXT_TARGET = "nextTarget"


SYMBOLS = {
    Marker.MISS: "o",
    Marker.HIT: "X",
    Marker.HEAD_HIT: "H",
    Marker.NEXT_TARGET: "?",
    Marker.PLANNED_HIT: "*",
}

_MARK_MARKERS = {
    Mark.NEXT_TARGET: Marker.NEXT_TARGET,
    Mark.PLANNED_HIT: Marker.PLANNED_HIT,
}


def own_marker(session: Session, cell: int) -> Optional[Marker]:
    """Marker for *cell* on our grid: the opponent's shots."""
    if cell in session.opponent_head_hits:
        return Marker.HEAD_HIT
    if cell in session.opponent_hits:
        return Marker.HIT
    if cell in session.opponent_shots:
        return Marker.MISS
    return None


def opponent_marker(session: Session, cell: int) -> Optional[Marker]:
    """Marker for *cell* on the opponent grid: our shots, then our marks."""
    if cell in session.head_hits:
        return Marker.HEAD_HIT
    if cell in session.hits:
        return Marker.HIT
    if cell in session.shots:
        return Marker.MISS
    mark = session.marks.get(cell)
    return _MARK_MARKERS[mark] if mark is not None else None


def grid_rows(session: Session, *, opponent: bool = False) -> List[str]:
    """Return one space-separated string of symbols per grid row.

    Our grid shows plane ids (1-3) under the opponent's shots; the
    opponent grid shows only our shots and marks.
    """
    rows: list[str] = []
    for r in range(GRID_SIZE):
        cells = []
        for c in range(GRID_SIZE):
            idx = rowcol_to_index(r, c)
            marker = opponent_marker(session, idx) if opponent else own_marker(session, idx)
            if marker is not None:
                cells.append(SYMBOLS[marker])
            elif not opponent and session.own_grid[idx] is not None:
                cells.append(str(session.own_grid[idx]))
            else:
                cells.append(".")
        rows.append(" ".join(cells))
    return rows


def status_line(session: Session) -> str:
    """One-line summary of where the match stands."""
    phase = session.phase
    if phase is Phase.DISCONNECTED:
        return "Disconnected"
    if phase is Phase.CONNECTING:
        return "Connected – CREATE a room or JOIN <room>"
    if phase is Phase.WAITING:
        return f"Room {session.room_id} – waiting for an opponent"
    if phase is Phase.PLACING:
        line = f"Placing {session.planes_placed}/{MAX_PLANES} – heading {session.orientation.value}°"
        if session.ready:
            line += " – ready, waiting for opponent"
        elif session.opponent_ready:
            line += " – opponent has all planes down"
        return line
    if phase is Phase.BATTLING:
        turn = "your turn" if session.my_turn else "opponent's turn"
        return f"Battle – {turn} – heads {session.my_head_hits_count}:{session.opponent_head_hits_count}"
    if session.i_won:
        return f"YOU WON – heads {session.my_head_hits_count}:{session.opponent_head_hits_count}"
    return f"YOU LOST – heads {session.my_head_hits_count}:{session.opponent_head_hits_count}"
