import pytest

from planewar.commands import (
    CommandParseError,
    CreateCommand,
    FireCommand,
    JoinCommand,
    MarkCommand,
    PlaceCommand,
    QuitCommand,
    ReadyCommand,
    RemoveCommand,
    RotateCommand,
    ShowCommand,
    parse_command,
)


def test_bare_verbs():
    assert isinstance(parse_command("CREATE"), CreateCommand)
    assert isinstance(parse_command("rotate"), RotateCommand)
    assert isinstance(parse_command(" ready "), ReadyCommand)
    assert isinstance(parse_command("SHOW"), ShowCommand)
    assert isinstance(parse_command("QUIT"), QuitCommand)


def test_join_keeps_room_id_verbatim():
    assert parse_command("join  ab12 ") == JoinCommand(room_id="ab12")


def test_fire_valid_A1():
    assert parse_command("FIRE A1") == FireCommand(cell=0)


def test_fire_valid_J10():
    assert parse_command("fire j10") == FireCommand(cell=99)


def test_cell_commands():
    assert parse_command("PLACE F6") == PlaceCommand(cell=55)
    assert parse_command("REMOVE c3") == RemoveCommand(cell=22)
    assert parse_command("MARK E3") == MarkCommand(cell=42)


@pytest.mark.parametrize(
    "line",
    ["FIRE K1", "FIRE A11", "FIRE", "PLACE", "JOIN", "JOIN   ", "READY now", "HELLO there", "    "],
)
def test_bad_lines(line):
    with pytest.raises(CommandParseError):
        parse_command(line)


def test_none_line():
    with pytest.raises(CommandParseError):
        parse_command(None)
