"""High-level rules: king capture, promotion, Go scoring."""

from __future__ import annotations

from typing import Final

from topoboard.core.board import Board
from topoboard.core.enums import Color, GameResult, PieceType
from topoboard.core.piece import Piece
from topoboard.core.types import Cell

PROMOTION_TYPES: Final = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    # Product policy:
    # - Chess ends when a king is captured; check and checkmate are not used.
    # - Go ends after two consecutive passes and is scored by stones on board.

    @staticmethod
    def is_king_captured(board: Board, color: Color) -> bool:
        """Whether *color* has no king left."""
        return not board.has_piece(color, PieceType.KING)

    @staticmethod
    def chess_result(board: Board) -> GameResult:
        white_gone = Rules.is_king_captured(board, Color.WHITE)
        black_gone = Rules.is_king_captured(board, Color.BLACK)
        if white_gone and black_gone:
            return GameResult.DRAW
        if black_gone:
            return GameResult.WHITE_WINS
        if white_gone:
            return GameResult.BLACK_WINS
        return GameResult.IN_PROGRESS

    @staticmethod
    def promotion_row(color: Color, size: int) -> int:
        """Far rank for *color*: white promotes on row 0, black on the last row."""
        return 0 if color == Color.WHITE else size - 1

    @staticmethod
    def is_promotion(piece: Piece, to_cell: Cell, size: int) -> bool:
        return piece.is_pawn and to_cell[0] == Rules.promotion_row(piece.color, size)

    @staticmethod
    def go_result(board: Board) -> GameResult:
        """Winner by stones on the board; equal counts are a draw."""
        black = board.count(Color.BLACK)
        white = board.count(Color.WHITE)
        if black > white:
            return GameResult.BLACK_WINS
        if white > black:
            return GameResult.WHITE_WINS
        return GameResult.DRAW
