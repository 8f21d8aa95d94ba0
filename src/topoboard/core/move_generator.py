"""Topology-aware chess move generation.

Target tables are precomputed per ``(size, topology)`` pair: for each cell
the canonical landing squares of every knight/king offset, and for each
sliding direction the ray of canonical squares walked one raw step at a time.
Rays are capped at ``size`` steps because wrapped boards never run out.

There is no check detection: a king may be left en prise, and capturing it
wins the game (see :mod:`topoboard.core.rules`).
"""

from __future__ import annotations

from functools import cache
from typing import Final

from topoboard.core.board import Board
from topoboard.core.enums import Color, PieceType, Topology
from topoboard.core.move import Move
from topoboard.core.piece import Piece
from topoboard.core.topology import Canonical, canonicalize
from topoboard.core.types import Cell, in_range

_KNIGHT_OFFSETS: Final = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
_KING_OFFSETS: Final = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
_ROOK_DIRECTIONS: Final = ((0, 1), (1, 0), (0, -1), (-1, 0))
_BISHOP_DIRECTIONS: Final = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_QUEEN_DIRECTIONS: Final = _ROOK_DIRECTIONS + _BISHOP_DIRECTIONS

_Targets = tuple[tuple[Canonical, ...], ...]  # [cell index] -> landing squares
_Rays = tuple[tuple[tuple[Canonical, ...], ...], ...]  # [cell index] -> rays


@cache
def _leaper_targets(
    size: int, topology: Topology, offsets: tuple[tuple[int, int], ...]
) -> _Targets:
    table: list[tuple[Canonical, ...]] = []
    for row in range(size):
        for col in range(size):
            targets = []
            for dr, dc in offsets:
                canon = canonicalize(row + dr, col + dc, size, topology)
                if canon is not None:
                    targets.append(canon)
            table.append(tuple(targets))
    return tuple(table)


@cache
def _ray_table(
    size: int, topology: Topology, directions: tuple[tuple[int, int], ...]
) -> _Rays:
    table: list[tuple[tuple[Canonical, ...], ...]] = []
    for row in range(size):
        for col in range(size):
            rays = []
            for dr, dc in directions:
                ray = []
                for step in range(1, size + 1):
                    canon = canonicalize(row + dr * step, col + dc * step, size, topology)
                    if canon is None:
                        break
                    ray.append(canon)
                rays.append(tuple(ray))
            table.append(tuple(rays))
    return tuple(table)


def pawn_start_row(color: Color, size: int) -> int:
    """Row from which a pawn of *color* may advance two squares."""
    return size - 2 if color == Color.WHITE else 1


def next_pawn_direction(direction: int, reflected: bool) -> int:
    """Pawn direction after a move; crossing a mirror seam reverses it."""
    return -direction if reflected else direction


class MoveGenerator:
    """Generates destinations for a single piece on a board under a topology.

    The generator only reads the board; it is safe to call speculatively,
    for example to highlight legal moves.
    """

    __slots__ = ("_board", "_topology")

    def __init__(self, board: Board, topology: Topology) -> None:
        self._board = board
        self._topology = topology

    def generate(self, from_cell: Cell, color: Color | None = None) -> list[Move]:
        """All moves of the piece on *from_cell*.

        Empty when the cell is empty, holds a Go stone, or holds a piece not of
        *color* (when *color* is given).  Each destination appears once.
        """
        size = self._board.size
        row, col = from_cell
        if not in_range(row, col, size):
            raise ValueError(f"Source {from_cell!r} is not a canonical cell")

        piece = self._board[from_cell]
        if not isinstance(piece, Piece):
            return []
        if color is not None and piece.color != color:
            return []

        moves: list[Move] = []
        index = row * size + col
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(from_cell, piece, moves)
        elif pt == PieceType.KNIGHT:
            targets = _leaper_targets(size, self._topology, _KNIGHT_OFFSETS)[index]
            self._gen_leaper(from_cell, piece.color, targets, moves)
        elif pt == PieceType.BISHOP:
            rays = _ray_table(size, self._topology, _BISHOP_DIRECTIONS)[index]
            self._gen_sliding(from_cell, piece.color, rays, moves)
        elif pt == PieceType.ROOK:
            rays = _ray_table(size, self._topology, _ROOK_DIRECTIONS)[index]
            self._gen_sliding(from_cell, piece.color, rays, moves)
        elif pt == PieceType.QUEEN:
            rays = _ray_table(size, self._topology, _QUEEN_DIRECTIONS)[index]
            self._gen_sliding(from_cell, piece.color, rays, moves)
        elif pt == PieceType.KING:
            targets = _leaper_targets(size, self._topology, _KING_OFFSETS)[index]
            self._gen_leaper(from_cell, piece.color, targets, moves)
        else:
            raise ValueError(f"Unhandled piece type: {pt!r}")

        return _dedupe(moves)

    def destinations(self, from_cell: Cell, color: Color | None = None) -> list[Cell]:
        return [move.to_cell for move in self.generate(from_cell, color)]

    # ── Per-piece generators ─────────────────────────────────────────────

    def _gen_pawn(self, sq: Cell, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        size = board.size
        topology = self._topology
        row, col = sq
        step = piece.direction

        one = canonicalize(row + step, col, size, topology)
        if one is not None and board.is_empty(one.cell):
            moves.append(Move(sq, one.cell, one.reflected))
            if row == pawn_start_row(piece.color, size):
                two = canonicalize(row + 2 * step, col, size, topology)
                if two is not None and board.is_empty(two.cell):
                    moves.append(Move(sq, two.cell, two.reflected))

        for dc in (-1, 1):
            cap = canonicalize(row + step, col + dc, size, topology)
            if cap is None:
                continue
            target = board[cap.cell]
            if isinstance(target, Piece) and target.color != piece.color:
                moves.append(Move(sq, cap.cell, cap.reflected))

    def _gen_leaper(
        self,
        sq: Cell,
        color: Color,
        targets: tuple[Canonical, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for canon in targets:
            if _can_land(board, canon.cell, color):
                moves.append(Move(sq, canon.cell, canon.reflected))

    def _gen_sliding(
        self,
        sq: Cell,
        color: Color,
        rays: tuple[tuple[Canonical, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for canon in ray:
                target = board[canon.cell]
                if target is None:
                    moves.append(Move(sq, canon.cell, canon.reflected))
                    continue
                if _is_enemy(target, color):
                    moves.append(Move(sq, canon.cell, canon.reflected))
                break


def legal_moves(board: Board, row: int, col: int, topology: Topology) -> list[Cell]:
    """Legal destination cells for the piece on ``(row, col)``."""
    return MoveGenerator(board, topology).destinations((row, col))


def _is_enemy(occupant: object, color: Color) -> bool:
    return isinstance(occupant, Piece) and occupant.color != color


def _can_land(board: Board, cell: Cell, color: Color) -> bool:
    target = board[cell]
    return target is None or _is_enemy(target, color)


def _dedupe(moves: list[Move]) -> list[Move]:
    seen: set[Cell] = set()
    unique: list[Move] = []
    for move in moves:
        if move.to_cell in seen:
            continue
        seen.add(move.to_cell)
        unique.append(move)
    return unique
