"""Abstract interfaces for the game layer.

Renderers and bridges depend on :class:`IGameSession`, not on the concrete
session class.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from topoboard.core.enums import Color, PieceType

if TYPE_CHECKING:
    from topoboard.core.types import Cell
    from topoboard.game.state import SessionSnapshot


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a session."""

    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    """Why a game reached ``GAME_OVER``."""

    NONE = 0
    KING_CAPTURED = auto()
    DOUBLE_PASS = auto()
    RESIGN = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameSession(ABC):
    """Interface for the rules orchestrator consumed by a renderer."""

    @abstractmethod
    def legal_moves(self, row: int, col: int) -> list[Cell]:
        """Destinations for the side to move's piece on ``(row, col)``."""

    @abstractmethod
    def attempt_chess_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        promotion: PieceType = PieceType.QUEEN,
    ) -> bool:
        """Submit a chess move. Returns True if legal and applied."""

    @abstractmethod
    def attempt_go_placement(self, row: int, col: int) -> bool:
        """Submit a Go placement. Returns True if legal and applied."""

    @abstractmethod
    def pass_turn(self) -> bool:
        """Pass in Go. Returns True if accepted."""

    @abstractmethod
    def resign(self, color: Color) -> bool:
        """Player of *color* resigns."""

    @abstractmethod
    def undo(self) -> bool:
        """Revert the last accepted action. Returns True on success."""

    @abstractmethod
    def reset(self) -> None:
        """Restore the starting position and clear all counters."""

    @abstractmethod
    def snapshot(self) -> SessionSnapshot:
        """Read-only view of the current state."""
