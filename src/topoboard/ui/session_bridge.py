"""Qt bridge that exposes a :class:`GameSession` to a renderer.

The bridge draws nothing.  A renderer connects its input handlers to the
``request_*`` slots and redraws from the snapshot carried by
``state_changed``.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from topoboard.core.enums import Color, GameResult, PieceType, Rejection
from topoboard.core.rules import PROMOTION_TYPES
from topoboard.game.config import GameConfig
from topoboard.game.session import GameSession
from topoboard.game.state import ActionRecord, GameState

_LOGGER = logging.getLogger(__name__)


class SessionBridge(QObject):
    """GUI-thread adapter between Qt input/rendering and the rules engine."""

    state_changed = pyqtSignal(object)  # SessionSnapshot
    move_rejected = pyqtSignal(int)  # Rejection
    game_over = pyqtSignal(int)  # GameResult
    legal_moves_ready = pyqtSignal(int, int, object)  # row, col, list[Cell]

    def __init__(
        self,
        session: GameSession | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = session if session is not None else GameSession()
        self._promotion = PieceType.QUEEN

        events = self._session.events
        events.on_action.append(self._on_action)
        events.on_rejected.append(self._on_rejected)
        events.on_game_over.append(self._on_game_over)
        events.on_reset.append(self._publish_state)

    @property
    def session(self) -> GameSession:
        return self._session

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int, int)
    def request_legal_moves(self, row: int, col: int) -> None:
        """Emit the destinations of the piece on ``(row, col)`` for highlighting."""
        self.legal_moves_ready.emit(row, col, self._session.legal_moves(row, col))

    @pyqtSlot(int, int, int, int)
    def request_chess_move(
        self, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> None:
        self._session.attempt_chess_move(
            (from_row, from_col), (to_row, to_col), self._promotion
        )

    @pyqtSlot(int)
    def set_promotion_piece(self, piece_type: int) -> None:
        """Choose what pawns promote to (default queen)."""
        try:
            chosen = PieceType(piece_type)
        except ValueError:
            chosen = None
        if chosen not in PROMOTION_TYPES:
            _LOGGER.warning("Ignoring invalid promotion piece: %r", piece_type)
            return
        self._promotion = chosen

    @pyqtSlot(int, int)
    def request_go_placement(self, row: int, col: int) -> None:
        self._session.attempt_go_placement(row, col)

    @pyqtSlot()
    def request_pass(self) -> None:
        self._session.pass_turn()

    @pyqtSlot(int)
    def request_resign(self, color: int) -> None:
        # Resignation has no action record, so publish the final state here.
        if self._session.resign(Color(color)):
            self._publish_state()

    @pyqtSlot()
    def request_undo(self) -> None:
        if self._session.undo():
            self._publish_state()

    @pyqtSlot()
    def request_reset(self) -> None:
        self._session.reset()

    @pyqtSlot(object)
    def request_new_game(self, config_obj: object) -> None:
        """Reset with a new :class:`GameConfig` (game kind, topology, size)."""
        if not isinstance(config_obj, GameConfig):
            _LOGGER.warning("Bridge received invalid game config: %r", config_obj)
            return
        self._session.reset(config_obj)

    # ── Session event handlers ───────────────────────────────────────────

    def _on_action(self, _record: ActionRecord, _state: GameState) -> None:
        self._publish_state()

    def _on_rejected(self, reason: Rejection) -> None:
        _LOGGER.debug("Renderer request rejected: %s", reason.name)
        self.move_rejected.emit(int(reason))

    def _on_game_over(self, result: GameResult) -> None:
        self.game_over.emit(int(result))

    def _publish_state(self) -> None:
        self.state_changed.emit(self._session.snapshot())
