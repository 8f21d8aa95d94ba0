"""Core enumerations for the board-game domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Color(IntEnum):
    """Side color, shared by chess pieces and Go stones."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Topology(IntEnum):
    """How the board edges are glued together."""

    CLASSIC = 0  # no wrap
    ROLLOVER = 1  # torus: both axes wrap
    MIRROR = 2  # columns wrap, rows wrap with reflection

    @classmethod
    def parse(cls, name: str) -> Topology:
        """Parse a topology name such as ``"rollover"`` (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown topology: {name!r}") from None

    @property
    def wraps(self) -> bool:
        return self != Topology.CLASSIC

    def __str__(self) -> str:
        return self.name.lower()


class GameKind(IntEnum):
    """Which game a session plays."""

    CHESS = auto()
    GO = auto()

    @classmethod
    def parse(cls, name: str) -> GameKind:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown game kind: {name!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS


class Rejection(IntEnum):
    """Why a move, placement or pass request was refused.

    Rejections are ordinary return values; the state is left untouched.
    """

    NO_PIECE_AT_SOURCE = auto()
    NOT_YOUR_TURN = auto()
    ILLEGAL_DESTINATION = auto()
    OUT_OF_BOUNDS = auto()
    OCCUPIED_CELL = auto()
    SUICIDE_MOVE = auto()
    KO_VIOLATION = auto()
    SUPERKO_VIOLATION = auto()
    GAME_ALREADY_OVER = auto()
    WRONG_GAME = auto()
    NOTHING_TO_UNDO = auto()
