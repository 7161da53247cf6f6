from dataclasses import dataclass
from typing import Union

from .coord_utils import COORD_RE, coord_to_index


class CommandParseError(Exception):
    """Raised when a line cannot be parsed as a valid command."""


@dataclass(frozen=True)
class CreateCommand:
    pass


@dataclass(frozen=True)
class JoinCommand:
    room_id: str


@dataclass(frozen=True)
class RotateCommand:
    pass


@dataclass(frozen=True)
class PlaceCommand:
    cell: int


@dataclass(frozen=True)
class RemoveCommand:
    cell: int


@dataclass(frozen=True)
class ReadyCommand:
    pass


@dataclass(frozen=True)
class FireCommand:
    cell: int


@dataclass(frozen=True)
class MarkCommand:
    cell: int


@dataclass(frozen=True)
class ShowCommand:
    pass


@dataclass(frozen=True)
class QuitCommand:
    pass


Command = Union[
    CreateCommand,
    JoinCommand,
    RotateCommand,
    PlaceCommand,
    RemoveCommand,
    ReadyCommand,
    FireCommand,
    MarkCommand,
    ShowCommand,
    QuitCommand,
]

_BARE = {
    "CREATE": CreateCommand,
    "ROTATE": RotateCommand,
    "READY": ReadyCommand,
    "SHOW": ShowCommand,
    "QUIT": QuitCommand,
}

_CELL = {
    "PLACE": PlaceCommand,
    "REMOVE": RemoveCommand,
    "FIRE": FireCommand,
    "MARK": MarkCommand,
}


def _parse_cell(verb: str, parts: list[str]) -> int:
    if len(parts) < 2 or not parts[1].strip():
        raise CommandParseError(f"{verb} requires a coordinate")
    coord = parts[1].strip().upper()
    if not COORD_RE.match(coord):
        raise CommandParseError(f"Invalid coordinate: {coord}")
    return coord_to_index(coord)


def parse_command(line: str) -> Command:
    if line is None:
        raise CommandParseError("No command to parse")
    raw = line.strip()
    if not raw:
        raise CommandParseError("Empty command")
    parts = raw.split(maxsplit=1)
    verb = parts[0].upper()
    if verb in _BARE and len(parts) == 1:
        return _BARE[verb]()
    elif verb in _CELL:
        return _CELL[verb](cell=_parse_cell(verb, parts))
    elif verb == "JOIN":
        if len(parts) < 2 or not parts[1].strip():
            raise CommandParseError("JOIN requires a room id")
        return JoinCommand(room_id=parts[1].strip())
    else:
        raise CommandParseError(f"Unknown command: {raw}")
