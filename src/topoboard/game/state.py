"""Game state - board, turn, counters and history for one session.

This is a pure data/logic class - no validation, no events.  The session
validates a request first and only then calls one of the ``apply_*``
methods, so every accepted action commits in full.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from topoboard.core.board import Board
from topoboard.core.enums import Color, GameKind, GameResult, PieceType, Topology
from topoboard.core.go_rules import apply_placement
from topoboard.core.move import Move
from topoboard.core.move_generator import next_pawn_direction
from topoboard.core.piece import Piece
from topoboard.core.rules import Rules
from topoboard.core.types import Cell
from topoboard.game.config import GameConfig
from topoboard.game.interfaces import GameEndReason, GamePhase


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A chess move in the session history."""

    color: Color
    move: Move
    piece: Piece
    captured: Piece | None = None
    promoted_to: PieceType | None = None


@dataclass(frozen=True, slots=True)
class PlacementRecord:
    """A Go stone placement in the session history."""

    color: Color
    cell: Cell
    captured: int = 0


@dataclass(frozen=True, slots=True)
class PassRecord:
    color: Color


ActionRecord: TypeAlias = MoveRecord | PlacementRecord | PassRecord


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view handed to renderers after every action."""

    kind: GameKind
    topology: Topology
    board: Board
    side_to_move: Color
    phase: GamePhase
    result: GameResult
    end_reason: GameEndReason
    black_captures: int
    white_captures: int
    black_stones: int
    white_stones: int
    pass_count: int
    last_move: Cell | None

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def winner(self) -> Color | None:
        if self.result == GameResult.WHITE_WINS:
            return Color.WHITE
        if self.result == GameResult.BLACK_WINS:
            return Color.BLACK
        return None


@dataclass(slots=True)
class _UndoState:
    """Snapshot saved before each action so we can undo it."""

    board: Board
    side_to_move: Color
    previous_fingerprint: str | None
    fingerprint_count: int
    pass_count: int
    captures: dict[Color, int]
    last_move: Cell | None


@dataclass
class GameState:
    """Mutable state of one game, owned by a single session."""

    config: GameConfig = field(default_factory=GameConfig)
    board: Board = field(init=False)
    side_to_move: Color = field(init=False)
    phase: GamePhase = field(default=GamePhase.AWAITING_MOVE, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    previous_fingerprint: str | None = field(default=None, init=False)
    fingerprints: list[str] = field(default_factory=list, init=False)
    pass_count: int = field(default=0, init=False)
    captures: dict[Color, int] = field(default_factory=dict, init=False)
    last_move: Cell | None = field(default=None, init=False)
    history: list[ActionRecord] = field(default_factory=list, init=False)
    _undo: list[_UndoState] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(
        self,
        config: GameConfig | None = None,
        board: Board | None = None,
        side_to_move: Color | None = None,
    ) -> None:
        """Initialise (or reset) the game.

        *board* replaces the standard starting layout (it is copied) and
        *side_to_move* overrides who starts: white in chess, black in Go.
        """
        if config is not None:
            self.config = config
        size = self.config.size
        if board is not None and board.size != size:
            raise ValueError(f"Board is {board.size}x{board.size}, config expects {size}")

        if self.config.kind == GameKind.CHESS:
            self.board = Board.initial_chess() if board is None else board.copy()
            self.side_to_move = Color.WHITE
        else:
            self.board = Board.empty(size) if board is None else board.copy()
            self.side_to_move = Color.BLACK
        if side_to_move is not None:
            self.side_to_move = side_to_move
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.previous_fingerprint = None
        self.fingerprints = [self.board.fingerprint()] if self.is_go else []
        self.pass_count = 0
        self.captures = {Color.WHITE: 0, Color.BLACK: 0}
        self.last_move = None
        self.history.clear()
        self._undo.clear()

    # ── Action application ───────────────────────────────────────────────

    def apply_chess_move(
        self, move: Move, promotion: PieceType = PieceType.QUEEN
    ) -> MoveRecord:
        """Apply a validated chess move and return the history record."""
        board = self.board
        piece = board[move.from_cell]
        if not isinstance(piece, Piece):
            raise ValueError(f"No piece on {move.from_cell}")
        self._push_undo()

        mover = piece.color
        target = board[move.to_cell]
        captured = target if isinstance(target, Piece) else None

        placed = piece
        promoted_to: PieceType | None = None
        if piece.is_pawn:
            placed = piece.with_direction(
                next_pawn_direction(piece.direction, move.reflected)
            )
            if Rules.is_promotion(placed, move.to_cell, board.size):
                placed = placed.promoted(promotion)
                promoted_to = promotion

        board[move.from_cell] = None
        board[move.to_cell] = placed
        if captured is not None:
            self.captures[mover] += 1
        self.last_move = move.to_cell

        record = MoveRecord(mover, move, piece, captured, promoted_to)
        self.history.append(record)

        if Rules.is_king_captured(board, mover.opposite):
            self._finish(GameResult.win_for(mover), GameEndReason.KING_CAPTURED)
        else:
            self.side_to_move = mover.opposite
        return record

    def apply_placement(self, row: int, col: int) -> PlacementRecord:
        """Place a stone for the side to move; caller checked legality."""
        self._push_undo()
        color = self.side_to_move
        outcome = apply_placement(self.board, row, col, color, self.config.topology)

        self.captures[color] += outcome.captured
        self.previous_fingerprint = outcome.fingerprint_before
        self.fingerprints.append(outcome.fingerprint_after)
        self.pass_count = 0
        self.last_move = outcome.cell

        record = PlacementRecord(color, outcome.cell, outcome.captured)
        self.history.append(record)
        self.side_to_move = color.opposite
        return record

    def apply_pass(self) -> PassRecord:
        """Pass for the side to move; the second consecutive pass ends the game."""
        self._push_undo()
        color = self.side_to_move
        self.pass_count += 1
        self.last_move = None
        record = PassRecord(color)
        self.history.append(record)

        if self.pass_count >= 2:
            self._finish(Rules.go_result(self.board), GameEndReason.DOUBLE_PASS)
        else:
            self.side_to_move = color.opposite
        return record

    def resign(self, color: Color) -> None:
        self._finish(GameResult.win_for(color.opposite), GameEndReason.RESIGN)

    def undo_last(self) -> ActionRecord | None:
        """Undo the last action. Returns its record, or None if empty."""
        if not self._undo:
            return None
        saved = self._undo.pop()
        self.board = saved.board
        self.side_to_move = saved.side_to_move
        self.previous_fingerprint = saved.previous_fingerprint
        del self.fingerprints[saved.fingerprint_count :]
        self.pass_count = saved.pass_count
        self.captures = saved.captures
        self.last_move = saved.last_move
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        return self.history.pop()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_go(self) -> bool:
        return self.config.kind == GameKind.GO

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    def snapshot(self) -> SessionSnapshot:
        board = self.board
        return SessionSnapshot(
            kind=self.config.kind,
            topology=self.config.topology,
            board=board.copy(),
            side_to_move=self.side_to_move,
            phase=self.phase,
            result=self.result,
            end_reason=self.end_reason,
            black_captures=self.captures[Color.BLACK],
            white_captures=self.captures[Color.WHITE],
            black_stones=board.count(Color.BLACK),
            white_stones=board.count(Color.WHITE),
            pass_count=self.pass_count,
            last_move=self.last_move,
        )

    # ── Internal ─────────────────────────────────────────────────────────

    def _push_undo(self) -> None:
        self._undo.append(
            _UndoState(
                board=self.board.copy(),
                side_to_move=self.side_to_move,
                previous_fingerprint=self.previous_fingerprint,
                fingerprint_count=len(self.fingerprints),
                pass_count=self.pass_count,
                captures=dict(self.captures),
                last_move=self.last_move,
            )
        )

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER
