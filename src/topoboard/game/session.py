"""GameSession - the orchestrator a renderer talks to.

Validates every request against the rules engine, applies accepted actions
through :class:`GameState`, and notifies listeners via simple callbacks.
Rejections are return values: the request returns ``False`` (or an empty
list), :attr:`GameSession.last_rejection` says why, and nothing else changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from topoboard.core.board import Board
from topoboard.core.enums import Color, GameKind, GameResult, PieceType, Rejection, Topology
from topoboard.core.go_rules import check_placement
from topoboard.core.move_generator import MoveGenerator
from topoboard.core.piece import Piece
from topoboard.core.rules import PROMOTION_TYPES
from topoboard.core.topology import canonicalize
from topoboard.core.types import Cell
from topoboard.game.config import GameConfig
from topoboard.game.interfaces import IGameSession
from topoboard.game.state import ActionRecord, GameState, SessionSnapshot

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

ActionCallback = Callable[[ActionRecord, GameState], None]
RejectedCallback = Callable[[Rejection], None]
GameOverCallback = Callable[[GameResult], None]
ResetCallback = Callable[[], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_action: list[ActionCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession(IGameSession):
    """Owns the board and turn state of one chess or Go game.

    Not thread-safe: every call runs to completion on the calling thread.
    """

    __slots__ = ("_state", "_last_rejection", "events")

    def __init__(self, config: GameConfig | None = None) -> None:
        self._state = GameState(config or GameConfig())
        self._last_rejection: Rejection | None = None
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def config(self) -> GameConfig:
        return self._state.config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def topology(self) -> Topology:
        return self._state.config.topology

    @property
    def board(self) -> Board:
        """A copy of the board; mutate it freely."""
        return self._state.board.copy()

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def result(self) -> GameResult:
        return self._state.result

    @property
    def winner(self) -> Color | None:
        return self.snapshot().winner

    @property
    def last_move(self) -> Cell | None:
        return self._state.last_move

    @property
    def pass_count(self) -> int:
        return self._state.pass_count

    @property
    def last_rejection(self) -> Rejection | None:
        """Why the most recent request was refused, ``None`` if it succeeded."""
        return self._last_rejection

    def captures(self, color: Color) -> int:
        """Stones (Go) or pieces (chess) captured so far by *color*."""
        return self._state.captures[color]

    def fingerprint(self) -> str:
        return self._state.board.fingerprint()

    # ── IGameSession impl ────────────────────────────────────────────────

    def legal_moves(self, row: int, col: int) -> list[Cell]:
        state = self._state
        if state.is_game_over or state.config.kind != GameKind.CHESS:
            return []
        source = self._canonical(row, col)
        if source is None:
            return []
        gen = MoveGenerator(state.board, self.topology)
        return gen.destinations(source, state.side_to_move)

    def attempt_chess_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        promotion: PieceType = PieceType.QUEEN,
    ) -> bool:
        if promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {promotion!r}")
        state = self._state
        if state.is_game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER)
        if state.config.kind != GameKind.CHESS:
            return self._reject(Rejection.WRONG_GAME)

        source = self._canonical(*from_cell)
        target = self._canonical(*to_cell)
        if source is None or target is None:
            return self._reject(Rejection.OUT_OF_BOUNDS)

        piece = state.board[source]
        if not isinstance(piece, Piece):
            return self._reject(Rejection.NO_PIECE_AT_SOURCE)
        if piece.color != state.side_to_move:
            return self._reject(Rejection.NOT_YOUR_TURN)

        gen = MoveGenerator(state.board, self.topology)
        move = next((m for m in gen.generate(source) if m.to_cell == target), None)
        if move is None:
            return self._reject(Rejection.ILLEGAL_DESTINATION)

        record = state.apply_chess_move(move, promotion)
        _LOGGER.debug("%s played %s", record.color, move)
        self._accept(record)
        return True

    def attempt_go_placement(self, row: int, col: int) -> bool:
        state = self._state
        if state.is_game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER)
        if state.config.kind != GameKind.GO:
            return self._reject(Rejection.WRONG_GAME)

        cell = self._canonical(row, col)
        if cell is None:
            return self._reject(Rejection.OUT_OF_BOUNDS)

        history = state.fingerprints if state.config.superko else None
        reason = check_placement(
            state.board,
            cell[0],
            cell[1],
            state.side_to_move,
            self.topology,
            state.previous_fingerprint,
            history,
        )
        if reason is not None:
            return self._reject(reason)

        record = state.apply_placement(*cell)
        _LOGGER.debug(
            "%s placed at %s capturing %d", record.color, record.cell, record.captured
        )
        self._accept(record)
        return True

    def pass_turn(self) -> bool:
        state = self._state
        if state.is_game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER)
        if state.config.kind != GameKind.GO:
            return self._reject(Rejection.WRONG_GAME)

        record = state.apply_pass()
        _LOGGER.debug("%s passed (%d in a row)", record.color, state.pass_count)
        self._accept(record)
        return True

    def resign(self, color: Color) -> bool:
        state = self._state
        if state.is_game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER)
        state.resign(color)
        self._last_rejection = None
        _LOGGER.debug("%s resigned", color)
        self._emit_game_over(state.result)
        return True

    def undo(self) -> bool:
        state = self._state
        if state.is_game_over:
            return self._reject(Rejection.GAME_ALREADY_OVER)
        if state.undo_last() is None:
            return self._reject(Rejection.NOTHING_TO_UNDO)
        self._last_rejection = None
        return True

    def reset(
        self,
        config: GameConfig | None = None,
        *,
        board: Board | None = None,
        side_to_move: Color | None = None,
    ) -> None:
        """Restore the starting layout, optionally switching configuration.

        *board* and *side_to_move* start from a custom position instead.
        """
        self._state.setup(config, board, side_to_move)
        self._last_rejection = None
        _LOGGER.debug("Session reset: %r", self._state.config)
        for cb in self.events.on_reset:
            cb()

    def snapshot(self) -> SessionSnapshot:
        return self._state.snapshot()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _canonical(self, row: int, col: int) -> Cell | None:
        """Fold raw (possibly tessellated) coordinates onto the board."""
        canon = canonicalize(row, col, self._state.config.size, self.topology)
        return None if canon is None else canon.cell

    def _accept(self, record: ActionRecord) -> None:
        self._last_rejection = None
        for cb in self.events.on_action:
            cb(record, self._state)
        if self._state.is_game_over:
            _LOGGER.debug(
                "Game over: %s (%s)",
                self._state.result.name,
                self._state.end_reason.name,
            )
            self._emit_game_over(self._state.result)

    def _reject(self, reason: Rejection) -> bool:
        self._last_rejection = reason
        _LOGGER.debug("Rejected request: %s", reason.name)
        for cb in self.events.on_rejected:
            cb(reason)
        return False

    def _emit_game_over(self, result: GameResult) -> None:
        for cb in self.events.on_game_over:
            cb(result)
