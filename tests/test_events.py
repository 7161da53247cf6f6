"""Parsing of inbound server frames."""

import pytest

from planewar.events import (
    AttackResult,
    EventParseError,
    GameStart,
    OpponentAttack,
    OpponentDisconnected,
    OpponentPlacementUpdate,
    PlacementUpdate,
    RoomCreated,
    ServerError,
    parse_event,
)


def test_room_created():
    ev = parse_event({"type": "room_created", "roomId": "123456", "playerId": "1", "placementPhase": True})
    assert ev == RoomCreated(room_id="123456", player_id="1")


def test_game_start_with_omitted_flags():
    # The server drops false fields from its JSON.
    ev = parse_event({"type": "game_start", "playerId": "2"})
    assert ev == GameStart(player_id="2", placement_phase=False, my_turn=False)


def test_placement_updates():
    assert parse_event({"type": "placement_update", "planesPlaced": 2, "placementPhase": True}) == PlacementUpdate(
        planes_placed=2, placement_phase=True
    )
    assert parse_event({"type": "placement_update", "placementPhase": True}).planes_placed == 0
    ev = parse_event({"type": "opponent_placement_update", "opponentReady": True, "placementPhase": True})
    assert ev == OpponentPlacementUpdate(placement_phase=True, opponent_ready=True)


def test_attack_result_full():
    ev = parse_event(
        {
            "type": "attack_result",
            "position": 42,
            "isHit": True,
            "isHeadHit": True,
            "headHits": 3,
            "gameOver": True,
            "winner": "1",
            "myTurn": False,
        }
    )
    assert isinstance(ev, AttackResult)
    assert (ev.position, ev.is_hit, ev.is_head_hit, ev.head_hits, ev.game_over, ev.winner) == (
        42,
        True,
        True,
        3,
        True,
        "1",
    )


def test_attack_on_cell_zero_omits_position():
    ev = parse_event({"type": "opponent_attack", "winner": "1"})
    assert isinstance(ev, OpponentAttack)
    assert ev.position == 0
    assert ev.is_hit is False
    assert ev.head_hits is None
    assert ev.winner == "1"


def test_error_and_disconnect():
    assert parse_event({"type": "error", "data": "Room not found"}) == ServerError("Room not found")
    assert parse_event({"type": "error"}) == ServerError("")
    assert parse_event({"type": "opponent_disconnected"}) == OpponentDisconnected()


@pytest.mark.parametrize(
    "frame",
    [
        None,
        [1, 2],
        "room_created",
        {},
        {"type": ""},
        {"type": "chat", "msg": "hi"},
        {"type": "attack_result", "position": "42"},
        {"type": "attack_result", "position": 4, "isHit": "yes"},
        {"type": "placement_update", "planesPlaced": True},
    ],
)
def test_malformed_frames_raise(frame):
    with pytest.raises(EventParseError):
        parse_event(frame)
