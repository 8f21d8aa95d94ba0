"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from topoboard.core.enums import Color, PieceType

# FEN character <-> (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


def home_direction(color: Color) -> int:
    """Row step of a freshly set-up pawn: white moves up, black down."""
    return -1 if color == Color.WHITE else 1


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece.

    ``direction`` is the pawn's row step (``+1`` or ``-1``).  It starts at the
    color's home direction and only changes when a pawn crosses a mirror
    seam.  Non-pawns always carry ``0``.
    """

    color: Color
    piece_type: PieceType
    direction: int = 0

    def __post_init__(self) -> None:
        if self.piece_type != PieceType.PAWN:
            object.__setattr__(self, "direction", 0)
        elif self.direction == 0:
            object.__setattr__(self, "direction", home_direction(self.color))
        elif self.direction not in (1, -1):
            raise ValueError(f"Pawn direction must be +1 or -1, got {self.direction}")

    @property
    def is_pawn(self) -> bool:
        return self.piece_type == PieceType.PAWN

    def with_direction(self, direction: int) -> Piece:
        return replace(self, direction=direction)

    def promoted(self, piece_type: PieceType = PieceType.QUEEN) -> Piece:
        """The piece a pawn turns into on the far rank."""
        return Piece(self.color, piece_type)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' -> white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
