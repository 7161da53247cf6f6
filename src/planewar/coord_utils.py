import re
from typing import Tuple

from .config import GRID_SIZE, CELL_COUNT

# Regex for valid coordinates A1–J10
COORD_RE = re.compile(r"^[A-J](10|[1-9])$")


def index_to_rowcol(index: int) -> Tuple[int, int]:
    """Split a cell index 0..99 into a zero-based (row, col) tuple."""
    return divmod(index, GRID_SIZE)


def rowcol_to_index(row: int, col: int) -> int:
    return row * GRID_SIZE + col


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def is_cell(index: object) -> bool:
    """Return True if *index* is an int naming a cell on the grid."""
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < CELL_COUNT


def coord_to_index(coord: str) -> int:
    """
    Convert a coordinate like 'A1' through 'J10' to a cell index.
    The letter picks the row, the number the column.
    """
    row = ord(coord[0]) - ord("A")
    col = int(coord[1:]) - 1
    return rowcol_to_index(row, col)


def format_coord(index: int) -> str:
    """
    Convert a cell index to a coordinate string like 'A1'.
    """
    row, col = index_to_rowcol(index)
    return f"{chr(ord('A') + row)}{col + 1}"
