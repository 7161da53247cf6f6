"""Client-side game session state machine.

A :class:`Session` is an immutable snapshot of everything one client can
see of a match. It only changes through the functions in this module:

* local actions (``place_plane``, ``attack`` ...) return a :data:`Step`,
  i.e. the next session plus the outbound action to send, or ``None`` when
  the action was rejected. Rejections are silent: same session, nothing
  to send.
* :func:`apply_event` folds one server event into the session.

Phases::

    DISCONNECTED -> CONNECTING -> WAITING -> PLACING -> BATTLING -> OVER

Own attacks flip the turn flag off before the server answers so a second
click cannot fire twice; an ``opponent_attack`` hands the turn back. The
winner is only ever taken from the server's payload.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Mapping, Optional, Tuple

from . import marks as _marks
from .config import MAX_PLANES
from .coord_utils import is_cell
from .events import (
    AttackResult,
    GameStart,
    OpponentAttack,
    OpponentDisconnected,
    OpponentPlacementUpdate,
    PlacementUpdate,
    RoomCreated,
    ServerError,
    ServerEvent,
)
from .geometry import Footprint, Orientation, footprint, head_of
from .marks import Mark
from .placement import EMPTY_GRID, OwnGrid, assign, next_plane_id, validate
from .protocol import Action, Attack, CreateRoom, JoinRoom, PlacePlane, PlayerReady, RemovePlane
from .retract import retract

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    WAITING = "waiting"
    PLACING = "placing"
    BATTLING = "battling"
    OVER = "over"


@dataclass(frozen=True)
class Session:
    """Immutable client view of one match."""

    phase: Phase = Phase.DISCONNECTED
    room_id: Optional[str] = None
    player_id: Optional[str] = None
    my_turn: bool = False
    placement_phase: bool = True
    planes_placed: int = 0
    orientation: Orientation = Orientation.UP
    ready: bool = False
    opponent_ready: bool = False
    own_grid: OwnGrid = EMPTY_GRID
    # What we have revealed about the opponent grid.
    shots: frozenset[int] = frozenset()
    hits: frozenset[int] = frozenset()
    head_hits: frozenset[int] = frozenset()
    # What the opponent has revealed about our grid.
    opponent_shots: frozenset[int] = frozenset()
    opponent_hits: frozenset[int] = frozenset()
    opponent_head_hits: frozenset[int] = frozenset()
    my_head_hits_count: int = 0
    opponent_head_hits_count: int = 0
    marks: Mapping[int, Mark] = field(default_factory=dict)
    last_attacked: Optional[int] = None
    game_over: bool = False
    winner: Optional[str] = None

    @property
    def can_place(self) -> bool:
        return self.phase is Phase.PLACING and self.placement_phase and self.planes_placed < MAX_PLANES

    @property
    def can_attack(self) -> bool:
        return self.phase is Phase.BATTLING and self.my_turn and not self.game_over

    @property
    def i_won(self) -> Optional[bool]:
        """True/False once the server has named a winner, else None."""
        if not self.game_over or self.winner is None:
            return None
        return self.winner == self.player_id


Step = Tuple[Session, Optional[Action]]


def _reject(session: Session, why: str, *args) -> Step:
    logger.debug("rejected: " + why, *args)
    return session, None


def fresh_session() -> Session:
    """A blank session on an open channel, waiting for a room action."""
    return Session(phase=Phase.CONNECTING)


# ---------------------------------------------------------------------------
# Channel lifecycle
# ---------------------------------------------------------------------------


def connection_opened(session: Session) -> Session:
    """A new connection always starts a clean session."""
    return fresh_session()


def connection_closed(session: Session) -> Session:
    return replace(session, phase=Phase.DISCONNECTED, my_turn=False)


# ---------------------------------------------------------------------------
# Local actions
# ---------------------------------------------------------------------------


def create_room(session: Session) -> Step:
    if session.phase is not Phase.CONNECTING:
        return _reject(session, "create_room in phase %s", session.phase.value)
    return session, CreateRoom()


def join_room(session: Session, room_id: str) -> Step:
    if session.phase is not Phase.CONNECTING:
        return _reject(session, "join_room in phase %s", session.phase.value)
    room_id = (room_id or "").strip()
    if not room_id:
        return _reject(session, "join_room without a room id")
    return replace(session, room_id=room_id), JoinRoom(room_id)


def rotate(session: Session) -> Session:
    """Turn the plane about to be placed by 90° clockwise."""
    if session.phase is not Phase.PLACING or not session.placement_phase:
        return session
    return replace(session, orientation=session.orientation.rotated())


def preview(session: Session, anchor: int) -> Tuple[Footprint, bool]:
    """Return the footprint under *anchor* and whether placing it would succeed."""
    if not session.can_place:
        return (), False
    cells = footprint(anchor, session.orientation)
    return cells, validate(cells, session.own_grid)


def place_plane(session: Session, anchor: int) -> Step:
    if not session.can_place:
        return _reject(session, "place_plane: placing closed (phase=%s, placed=%d)", session.phase.value, session.planes_placed)
    cells = footprint(anchor, session.orientation)
    if not validate(cells, session.own_grid):
        return _reject(session, "place_plane: invalid footprint at %s/%s", anchor, session.orientation.value)
    plane_id = next_plane_id(session.own_grid)
    if plane_id is None:
        return _reject(session, "place_plane: no free plane id")

    placed = min(session.planes_placed + 1, MAX_PLANES)
    nxt = replace(
        session,
        own_grid=assign(session.own_grid, cells, plane_id),
        planes_placed=placed,
        ready=False,
    )
    logger.debug("placed plane %d head=%d (%d/%d)", plane_id, head_of(cells), placed, MAX_PLANES)
    return nxt, PlacePlane(positions=cells, planes_placed=placed, room_id=session.room_id)


def remove_plane(session: Session, cell: int) -> Step:
    if session.phase is not Phase.PLACING or not session.placement_phase:
        return _reject(session, "remove_plane in phase %s", session.phase.value)
    grid, removed = retract(session.own_grid, cell)
    if not removed:
        return _reject(session, "remove_plane: cell %s is open sky", cell)
    placed = max(0, session.planes_placed - 1)
    nxt = replace(session, own_grid=grid, planes_placed=placed, ready=False)
    return nxt, RemovePlane(planes_placed=placed, room_id=session.room_id)


def declare_ready(session: Session) -> Step:
    if session.phase is not Phase.PLACING or session.planes_placed != MAX_PLANES:
        return _reject(session, "ready with %d planes in phase %s", session.planes_placed, session.phase.value)
    if session.ready:
        return _reject(session, "already ready")
    return replace(session, ready=True), PlayerReady()


def attack(session: Session, cell: int) -> Step:
    if not session.can_attack:
        return _reject(session, "attack: not our turn (phase=%s)", session.phase.value)
    if not is_cell(cell):
        return _reject(session, "attack: %r is not a cell", cell)
    if cell in session.shots:
        return _reject(session, "attack: cell %d already fired at", cell)
    nxt = replace(
        session,
        shots=session.shots | {cell},
        my_turn=False,
        last_attacked=cell,
        marks=_marks.evict(cell, session.marks),
    )
    return nxt, Attack(position=cell, room_id=session.room_id)


def mark(session: Session, cell: int) -> Session:
    """Advance the local mark on an unfired opponent cell."""
    if session.phase not in (Phase.BATTLING, Phase.OVER) or not is_cell(cell):
        return session
    if cell in session.shots:
        return session
    return replace(session, marks=_marks.cycle(cell, session.marks, session.shots))


# ---------------------------------------------------------------------------
# Server events
# ---------------------------------------------------------------------------


def _on_room_created(session: Session, ev: RoomCreated) -> Session:
    return replace(
        session,
        phase=Phase.WAITING,
        room_id=ev.room_id,
        player_id=ev.player_id,
        placement_phase=True,
        planes_placed=0,
    )


def _on_game_start(session: Session, ev: GameStart) -> Session:
    return replace(
        session,
        phase=Phase.PLACING if ev.placement_phase else Phase.BATTLING,
        player_id=ev.player_id or session.player_id,
        placement_phase=ev.placement_phase,
        my_turn=ev.my_turn,
    )


def _synced_phase(session: Session, placement_phase: bool) -> Phase:
    # A closed placement phase while placing means the battle has begun.
    if session.phase is Phase.PLACING and not placement_phase:
        return Phase.BATTLING
    return session.phase


def _on_placement_update(session: Session, ev: PlacementUpdate) -> Session:
    return replace(
        session,
        phase=_synced_phase(session, ev.placement_phase),
        planes_placed=ev.planes_placed,
        placement_phase=ev.placement_phase,
    )


def _on_opponent_placement_update(session: Session, ev: OpponentPlacementUpdate) -> Session:
    return replace(
        session,
        phase=_synced_phase(session, ev.placement_phase),
        placement_phase=ev.placement_phase,
        opponent_ready=ev.opponent_ready,
    )


def _outcome_phase(ev: AttackResult | OpponentAttack) -> Phase:
    return Phase.OVER if ev.game_over else Phase.BATTLING


def _on_attack_result(session: Session, ev: AttackResult) -> Session:
    pos = ev.position
    return replace(
        session,
        phase=_outcome_phase(ev),
        my_turn=False,
        shots=session.shots | {pos},
        hits=session.hits | {pos} if ev.is_hit or ev.is_head_hit else session.hits,
        head_hits=session.head_hits | {pos} if ev.is_head_hit else session.head_hits,
        my_head_hits_count=session.my_head_hits_count if ev.head_hits is None else ev.head_hits,
        marks=_marks.evict(pos, session.marks),
        game_over=ev.game_over,
        winner=ev.winner if ev.game_over else None,
    )


def _on_opponent_attack(session: Session, ev: OpponentAttack) -> Session:
    pos = ev.position
    return replace(
        session,
        phase=_outcome_phase(ev),
        my_turn=not ev.game_over,
        opponent_shots=session.opponent_shots | {pos},
        opponent_hits=session.opponent_hits | {pos} if ev.is_hit or ev.is_head_hit else session.opponent_hits,
        opponent_head_hits=session.opponent_head_hits | {pos} if ev.is_head_hit else session.opponent_head_hits,
        opponent_head_hits_count=session.opponent_head_hits_count if ev.head_hits is None else ev.head_hits,
        game_over=ev.game_over,
        winner=ev.winner if ev.game_over else None,
    )


def _on_error(session: Session, ev: ServerError) -> Session:
    return session


def _on_opponent_disconnected(session: Session, ev: OpponentDisconnected) -> Session:
    return fresh_session()


_HANDLERS: Dict[type, Callable[[Session, ServerEvent], Session]] = {
    RoomCreated: _on_room_created,
    GameStart: _on_game_start,
    PlacementUpdate: _on_placement_update,
    OpponentPlacementUpdate: _on_opponent_placement_update,
    AttackResult: _on_attack_result,
    OpponentAttack: _on_opponent_attack,
    ServerError: _on_error,
    OpponentDisconnected: _on_opponent_disconnected,
}


def apply_event(session: Session, event: ServerEvent) -> Session:
    """Return the session after *event*; unknown events leave it unchanged."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        logger.debug("Ignoring event %r", event)
        return session
    if isinstance(event, (AttackResult, OpponentAttack)) and not is_cell(event.position):
        logger.warning("Ignoring %s for off-grid position %r", type(event).__name__, event.position)
        return session
    return handler(session, event)
