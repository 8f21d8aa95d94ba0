"""Core domain layer - topology-aware board logic with zero external dependencies.

Quick start::

    from topoboard.core import Board, Topology, legal_moves

    board = Board.initial_chess()
    legal_moves(board, 7, 1, Topology.ROLLOVER)   # knight on b1
"""

from topoboard.core.board import Board, Occupant
from topoboard.core.enums import Color, GameKind, GameResult, PieceType, Rejection, Topology
from topoboard.core.go_rules import (
    PlacementResult,
    apply_placement,
    check_placement,
    group_at,
    is_legal_placement,
    liberties_of,
)
from topoboard.core.move import Move
from topoboard.core.move_generator import MoveGenerator, legal_moves, next_pawn_direction
from topoboard.core.notation import (
    STARTING_CHESS_DIAGRAM,
    board_from_diagram,
    board_to_diagram,
)
from topoboard.core.piece import Piece
from topoboard.core.rules import PROMOTION_TYPES, Rules
from topoboard.core.topology import Canonical, canonicalize, neighbors
from topoboard.core.types import Cell, cell_name, parse_cell

__all__ = [
    # Enums
    "Color",
    "GameKind",
    "GameResult",
    "PieceType",
    "Rejection",
    "Topology",
    # Types / helpers
    "Canonical",
    "Cell",
    "canonicalize",
    "cell_name",
    "neighbors",
    "parse_cell",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Occupant",
    "Piece",
    "PlacementResult",
    "Rules",
    "PROMOTION_TYPES",
    # Chess
    "legal_moves",
    "next_pawn_direction",
    # Go
    "apply_placement",
    "check_placement",
    "group_at",
    "is_legal_placement",
    "liberties_of",
    # Notation
    "STARTING_CHESS_DIAGRAM",
    "board_from_diagram",
    "board_to_diagram",
]
