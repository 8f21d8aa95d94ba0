"""Text diagrams for boards.

A diagram has one line per row, top row first, one character per cell:
``.`` empty, FEN letters for chess pieces (uppercase = white), ``x`` for a
black stone and ``o`` for a white stone.  Rows may also be separated by
``/``, which is the format of :meth:`Board.fingerprint`.  Spaces inside a
row are ignored.
"""

from __future__ import annotations

from topoboard.core.board import Board, Occupant
from topoboard.core.enums import Color
from topoboard.core.piece import Piece

STARTING_CHESS_DIAGRAM = "rnbqkbnr/pppppppp/......../......../......../......../PPPPPPPP/RNBQKBNR"

_STONES: dict[str, Color] = {"x": Color.BLACK, "o": Color.WHITE}


def _parse_char(ch: str) -> Occupant:
    if ch == ".":
        return None
    stone = _STONES.get(ch)
    if stone is not None:
        return stone
    return Piece.from_char(ch)


def board_from_diagram(diagram: str) -> Board:
    """Parse a diagram into a :class:`Board`."""
    text = diagram.strip().replace("/", "\n")
    rows = ["".join(line.split()) for line in text.splitlines()]
    rows = [row for row in rows if row]
    size = len(rows)
    if size == 0:
        raise ValueError("Empty board diagram")

    board = Board(size)
    for row_idx, row_text in enumerate(rows):
        if len(row_text) != size:
            raise ValueError(
                f"Diagram row {row_idx} has {len(row_text)} cells, expected {size}"
            )
        for col_idx, ch in enumerate(row_text):
            try:
                occupant = _parse_char(ch)
            except ValueError:
                raise ValueError(f"Invalid diagram character {ch!r}") from None
            if occupant is not None:
                board[row_idx, col_idx] = occupant
    return board


def board_to_diagram(board: Board) -> str:
    """Multi-line diagram of *board*."""
    return board.fingerprint().replace("/", "\n")
