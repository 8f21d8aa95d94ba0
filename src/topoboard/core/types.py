"""Cell type alias and coordinate helpers.

Boards are stored row-major:
    (0, 0)=0, (0, 1)=1, ..., (0, size-1)=size-1
    (1, 0)=size, ...

Row 0 is the top edge as seen by the renderer; black sets up there in chess.
"""

from __future__ import annotations

from typing import TypeAlias

Cell: TypeAlias = tuple[int, int]  # (row, col)

_FILES = "abcdefghjklmnopqrstuvwxyz"  # Go convention: no "i"


def index_of(cell: Cell, size: int) -> int:
    """Row-major arena index of a canonical *cell*."""
    row, col = cell
    return row * size + col


def cell_of(index: int, size: int) -> Cell:
    """Inverse of :func:`index_of`."""
    return divmod(index, size)


def in_range(row: int, col: int, size: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def cell_name(cell: Cell, size: int) -> str:
    """Human-readable name with rank 1 at the bottom row, e.g. (7, 4) -> 'e1'."""
    row, col = cell
    if not in_range(row, col, size) or size > len(_FILES):
        raise ValueError(f"Cell {cell!r} is not on a {size}x{size} board")
    return f"{_FILES[col]}{size - row}"


def parse_cell(name: str, size: int) -> Cell:
    """Parse a name produced by :func:`cell_name`, e.g. 'e1' -> (7, 4)."""
    text = name.strip().lower()
    if len(text) < 2 or text[0] not in _FILES or not text[1:].isdigit():
        raise ValueError(f"Invalid cell name: {name!r}")
    col = _FILES.index(text[0])
    row = size - int(text[1:])
    if not in_range(row, col, size):
        raise ValueError(f"Cell {name!r} is not on a {size}x{size} board")
    return row, col
