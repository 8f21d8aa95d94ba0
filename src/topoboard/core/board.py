"""Board - occupant placement on a square grid of any size."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TypeAlias

from topoboard.core.enums import Color, PieceType
from topoboard.core.piece import Piece
from topoboard.core.types import Cell, in_range

Occupant: TypeAlias = Piece | Color | None  # chess piece, Go stone, or empty

_STONE_CHARS: dict[Color, str] = {Color.BLACK: "x", Color.WHITE: "o"}
_EMPTY_CHAR = "."
_ROW_SEPARATOR = "/"

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

CHESS_SIZE = 8


def occupant_color(occupant: Occupant) -> Color | None:
    """Color of a piece or stone, ``None`` for an empty cell."""
    if occupant is None:
        return None
    if isinstance(occupant, Piece):
        return occupant.color
    return occupant


def occupant_char(occupant: Occupant) -> str:
    if occupant is None:
        return _EMPTY_CHAR
    if isinstance(occupant, Piece):
        return str(occupant)
    return _STONE_CHARS[occupant]


class Board:
    """Mutable ``size x size`` grid stored as a row-major arena.

    Cells are addressed with canonical ``(row, col)`` tuples.  Per-color
    occupant counts are kept incrementally.
    """

    __slots__ = ("_size", "_cells", "_counts")

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"Board size must be positive, got {size}")
        self._size = size
        self._cells: list[Occupant] = [None] * (size * size)
        # [color] -> number of pieces/stones of that color on the board.
        self._counts: list[int] = [0, 0]

    @property
    def size(self) -> int:
        return self._size

    def _index(self, cell: Cell) -> int:
        row, col = cell
        if not in_range(row, col, self._size):
            raise IndexError(f"Cell {cell!r} is off a {self._size}x{self._size} board")
        return row * self._size + col

    # -- Element access -----------------------------------------------------

    def __getitem__(self, cell: Cell) -> Occupant:
        return self._cells[self._index(cell)]

    def __setitem__(self, cell: Cell, occupant: Occupant) -> None:
        idx = self._index(cell)
        old = self._cells[idx]
        old_color = occupant_color(old)
        if old_color is not None:
            self._counts[int(old_color)] -= 1
        self._cells[idx] = occupant
        new_color = occupant_color(occupant)
        if new_color is not None:
            self._counts[int(new_color)] += 1

    def at_index(self, index: int) -> Occupant:
        """Occupant by row-major arena index (no bounds folding)."""
        return self._cells[index]

    def clear_index(self, index: int) -> None:
        old_color = occupant_color(self._cells[index])
        if old_color is not None:
            self._counts[int(old_color)] -= 1
        self._cells[index] = None

    def is_empty(self, cell: Cell) -> bool:
        return self[cell] is None

    # -- Query helpers ------------------------------------------------------

    def count(self, color: Color) -> int:
        """Number of pieces or stones of *color* on the board."""
        return self._counts[int(color)]

    def occupied(self) -> Iterator[tuple[Cell, Piece | Color]]:
        """Iterate ``(cell, occupant)`` over non-empty cells, row by row."""
        size = self._size
        for idx, occupant in enumerate(self._cells):
            if occupant is not None:
                yield divmod(idx, size), occupant

    def find(self, color: Color, piece_type: PieceType) -> list[Cell]:
        """Cells holding *color*'s *piece_type*."""
        return [
            cell
            for cell, occupant in self.occupied()
            if isinstance(occupant, Piece)
            and occupant.color == color
            and occupant.piece_type == piece_type
        ]

    def has_piece(self, color: Color, piece_type: PieceType) -> bool:
        return bool(self.find(color, piece_type))

    def fingerprint(self) -> str:
        """Canonical text encoding of the contents, one character per cell.

        Equal contents always give equal fingerprints, whatever the history.
        """
        size = self._size
        chars = [occupant_char(occupant) for occupant in self._cells]
        return _ROW_SEPARATOR.join(
            "".join(chars[row * size : (row + 1) * size]) for row in range(size)
        )

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board(self._size)
        b._cells = self._cells.copy()
        b._counts = self._counts.copy()
        return b

    def clear(self) -> None:
        self._cells = [None] * (self._size * self._size)
        self._counts = [0, 0]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls, size: int) -> Board:
        """Empty board, the Go starting position."""
        return cls(size)

    @classmethod
    def initial_chess(cls) -> Board:
        """Standard chess starting position, black on rows 0-1."""
        b = cls(CHESS_SIZE)
        last = CHESS_SIZE - 1
        for col, pt in enumerate(_BACK_RANK):
            b[0, col] = Piece(Color.BLACK, pt)
            b[1, col] = Piece(Color.BLACK, PieceType.PAWN)
            b[last - 1, col] = Piece(Color.WHITE, PieceType.PAWN)
            b[last, col] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    def __repr__(self) -> str:
        return "\n".join(self.fingerprint().split(_ROW_SEPARATOR))
