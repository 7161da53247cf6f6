"""Outbound protocol actions and JSON frame encoding.

Every frame on the channel is one UTF-8 JSON object tagged by ``type``.
Field names on the wire are camelCase (``roomId``, ``planesPlaced``) to
match the game server; the dataclasses below use snake_case and convert
in :meth:`to_message`.

Client → Server actions
-----------------------
create_room                               open a new room, we become player 1
join_room     roomId                      join an existing room as player 2
place_plane   positions planesPlaced roomId
remove_plane  planesPlaced roomId
player_ready                              all three planes are down
attack        position roomId             fire at one opponent cell
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


class ActionType(str, enum.Enum):
    """Enumerate outbound action tags."""

    CREATE_ROOM = "create_room"
    JOIN_ROOM = "join_room"
    PLACE_PLANE = "place_plane"
    REMOVE_PLANE = "remove_plane"
    PLAYER_READY = "player_ready"
    ATTACK = "attack"


class FrameError(Exception):
    """Raised when a frame cannot be decoded as JSON."""


@dataclass(frozen=True)
class CreateRoom:
    def to_message(self) -> Dict[str, Any]:
        return {"type": ActionType.CREATE_ROOM.value}


@dataclass(frozen=True)
class JoinRoom:
    room_id: str

    def to_message(self) -> Dict[str, Any]:
        return {"type": ActionType.JOIN_ROOM.value, "roomId": self.room_id}


@dataclass(frozen=True)
class PlacePlane:
    positions: Tuple[int, ...]
    planes_placed: int
    room_id: Optional[str]

    def to_message(self) -> Dict[str, Any]:
        return {
            "type": ActionType.PLACE_PLANE.value,
            "positions": list(self.positions),
            "planesPlaced": self.planes_placed,
            "roomId": self.room_id,
        }


@dataclass(frozen=True)
class RemovePlane:
    planes_placed: int
    room_id: Optional[str]

    def to_message(self) -> Dict[str, Any]:
        return {
            "type": ActionType.REMOVE_PLANE.value,
            "planesPlaced": self.planes_placed,
            "roomId": self.room_id,
        }


@dataclass(frozen=True)
class PlayerReady:
    def to_message(self) -> Dict[str, Any]:
        return {"type": ActionType.PLAYER_READY.value}


@dataclass(frozen=True)
class Attack:
    position: int
    room_id: Optional[str]

    def to_message(self) -> Dict[str, Any]:
        return {"type": ActionType.ATTACK.value, "position": self.position, "roomId": self.room_id}


Action = Union[CreateRoom, JoinRoom, PlacePlane, RemovePlane, PlayerReady, Attack]


# ---------------------------------------------------------------------------
# Framing
# ---------------------------------------------------------------------------


def pack(obj: Any) -> str:
    """Serialize one message into a text frame."""
    return json.dumps(obj, separators=(",", ":"))


def unpack(frame: str | bytes) -> Any:
    """Decode one text (or UTF-8 bytes) frame."""
    try:
        return json.loads(frame)
    except (ValueError, TypeError) as exc:
        raise FrameError(f"Undecodable frame: {exc}") from exc


__all__ = [
    "ActionType",
    "FrameError",
    "CreateRoom",
    "JoinRoom",
    "PlacePlane",
    "RemovePlane",
    "PlayerReady",
    "Attack",
    "Action",
    "pack",
    "unpack",
]
