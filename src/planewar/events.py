"""Typed model of the events the game server pushes to a client.

Frames arrive as JSON objects tagged by ``type``. :func:`parse_event`
turns one into an immutable record so the session state machine never
has to poke at raw dictionaries.

The reference server omits zero-valued fields, so a missing boolean reads
as ``False`` and a missing ``position`` or ``planesPlaced`` as ``0``. A
missing ``headHits`` stays ``None``: the session then keeps its counter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union


class EventParseError(ValueError):
    """Raised when an inbound frame is not a well-formed server event."""


class EventType(str, Enum):
    ROOM_CREATED = "room_created"
    GAME_START = "game_start"
    PLACEMENT_UPDATE = "placement_update"
    OPPONENT_PLACEMENT_UPDATE = "opponent_placement_update"
    ATTACK_RESULT = "attack_result"
    OPPONENT_ATTACK = "opponent_attack"
    ERROR = "error"
    OPPONENT_DISCONNECTED = "opponent_disconnected"


@dataclass(frozen=True, slots=True)
class RoomCreated:
    room_id: str
    player_id: str


@dataclass(frozen=True, slots=True)
class GameStart:
    player_id: str
    placement_phase: bool
    my_turn: bool


@dataclass(frozen=True, slots=True)
class PlacementUpdate:
    planes_placed: int
    placement_phase: bool


@dataclass(frozen=True, slots=True)
class OpponentPlacementUpdate:
    placement_phase: bool
    opponent_ready: bool = False


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Shared shape of ``attack_result`` and ``opponent_attack``."""

    position: int
    is_hit: bool = False
    is_head_hit: bool = False
    head_hits: Optional[int] = None
    game_over: bool = False
    winner: Optional[str] = None


@dataclass(frozen=True, slots=True)
class AttackResult(AttackOutcome):
    """Outcome of our own shot at the opponent grid."""


@dataclass(frozen=True, slots=True)
class OpponentAttack(AttackOutcome):
    """Outcome of the opponent's shot at our grid."""


@dataclass(frozen=True, slots=True)
class ServerError:
    message: str


@dataclass(frozen=True, slots=True)
class OpponentDisconnected:
    pass


ServerEvent = Union[
    RoomCreated,
    GameStart,
    PlacementUpdate,
    OpponentPlacementUpdate,
    AttackResult,
    OpponentAttack,
    ServerError,
    OpponentDisconnected,
]


# ---------------------------------------------------------------------------
# Field readers
# ---------------------------------------------------------------------------


def _flag(obj: Dict[str, Any], key: str) -> bool:
    value = obj.get(key, False)
    if not isinstance(value, bool):
        raise EventParseError(f"{key} must be a boolean, got {value!r}")
    return value


def _int(obj: Dict[str, Any], key: str, default: Optional[int] = 0) -> Optional[int]:
    value = obj.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventParseError(f"{key} must be an integer, got {value!r}")
    return value


def _text(obj: Dict[str, Any], key: str) -> Optional[str]:
    value = obj.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _outcome_fields(obj: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "position": _int(obj, "position"),
        "is_hit": _flag(obj, "isHit"),
        "is_head_hit": _flag(obj, "isHeadHit"),
        "head_hits": _int(obj, "headHits", default=None),
        "game_over": _flag(obj, "gameOver"),
        "winner": _text(obj, "winner"),
    }


def _error_text(obj: Dict[str, Any]) -> str:
    data = obj.get("data")
    if data is None:
        return ""
    return data if isinstance(data, str) else str(data)


_PARSERS: Dict[EventType, Callable[[Dict[str, Any]], ServerEvent]] = {
    EventType.ROOM_CREATED: lambda o: RoomCreated(room_id=_text(o, "roomId") or "", player_id=_text(o, "playerId") or ""),
    EventType.GAME_START: lambda o: GameStart(
        player_id=_text(o, "playerId") or "",
        placement_phase=_flag(o, "placementPhase"),
        my_turn=_flag(o, "myTurn"),
    ),
    EventType.PLACEMENT_UPDATE: lambda o: PlacementUpdate(
        planes_placed=_int(o, "planesPlaced"),
        placement_phase=_flag(o, "placementPhase"),
    ),
    EventType.OPPONENT_PLACEMENT_UPDATE: lambda o: OpponentPlacementUpdate(
        placement_phase=_flag(o, "placementPhase"),
        opponent_ready=_flag(o, "opponentReady"),
    ),
    EventType.ATTACK_RESULT: lambda o: AttackResult(**_outcome_fields(o)),
    EventType.OPPONENT_ATTACK: lambda o: OpponentAttack(**_outcome_fields(o)),
    EventType.ERROR: lambda o: ServerError(message=_error_text(o)),
    EventType.OPPONENT_DISCONNECTED: lambda o: OpponentDisconnected(),
}


def parse_event(obj: Any) -> ServerEvent:
    """Convert one decoded inbound frame into a typed event."""
    if not isinstance(obj, dict):
        raise EventParseError(f"Event frame must be an object, got {type(obj).__name__}")
    raw_type = obj.get("type")
    if not raw_type:
        raise EventParseError("Event frame has no type")
    try:
        etype = EventType(raw_type)
    except ValueError:
        raise EventParseError(f"Unknown event type: {raw_type}") from None
    return _PARSERS[etype](obj)
