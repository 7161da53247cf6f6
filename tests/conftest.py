import sys
from pathlib import Path

import pytest

# Ensure local `src` directory is importable before project is installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from planewar.events import GameStart, RoomCreated
from planewar.router import GameRouter
from planewar.session import Session, apply_event, fresh_session, place_plane

# Three non-overlapping UP planes: two touching diagonally in the top rows,
# one tucked under the first.
PLANE_ANCHORS = (2, 7, 42)


class RecordingChannel:
    """Stand-in for the websocket channel: records every frame sent."""

    def __init__(self, open_: bool = True) -> None:
        self.sent: list[dict] = []
        self.open = open_

    def send(self, obj: dict) -> bool:
        if not self.open:
            return False
        self.sent.append(obj)
        return True

    def types(self) -> list[str]:
        return [m["type"] for m in self.sent]


def placing_session() -> Session:
    s = apply_event(fresh_session(), RoomCreated(room_id="4711", player_id="1"))
    return apply_event(s, GameStart(player_id="1", placement_phase=True, my_turn=False))


def full_fleet_session() -> Session:
    s = placing_session()
    for anchor in PLANE_ANCHORS:
        s, action = place_plane(s, anchor)
        assert action is not None
    return s


def battle_session(my_turn: bool = True) -> Session:
    s = full_fleet_session()
    return apply_event(s, GameStart(player_id="1", placement_phase=False, my_turn=my_turn))


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def router(channel: RecordingChannel) -> GameRouter:
    r = GameRouter()
    r.attach(channel.send)
    return r
