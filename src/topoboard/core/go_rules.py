"""Go capture engine: groups, liberties, captures, suicide and ko.

All traversal works on row-major arena indexes with a precomputed neighbour
table (:func:`topoboard.core.topology.neighbor_table`).  Flood fills are
iterative with a ``bytearray`` visited map, so they terminate on wrapped
boards where the adjacency graph has cycles through the seams.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from topoboard.core.board import Board
from topoboard.core.enums import Color, Rejection, Topology
from topoboard.core.topology import neighbor_table
from topoboard.core.types import Cell, in_range


@dataclass(frozen=True, slots=True)
class PlacementResult:
    """Outcome of a committed stone placement."""

    cell: Cell
    color: Color
    captured: int
    fingerprint_before: str
    fingerprint_after: str


def _check_cell(board: Board, row: int, col: int) -> int:
    size = board.size
    if not in_range(row, col, size):
        raise ValueError(f"({row}, {col}) is not a canonical cell of a {size}x{size} board")
    return row * size + col


def _flood(board: Board, start: int, table: tuple[tuple[int, ...], ...]) -> list[int]:
    """Indexes of the same-color group containing *start*."""
    color = board.at_index(start)
    if color is None:
        return []
    visited = bytearray(len(table))
    visited[start] = 1
    stack = [start]
    group: list[int] = []
    while stack:
        idx = stack.pop()
        group.append(idx)
        for nb in table[idx]:
            if not visited[nb] and board.at_index(nb) == color:
                visited[nb] = 1
                stack.append(nb)
    return group


def _liberty_count(
    board: Board, group: list[int], table: tuple[tuple[int, ...], ...]
) -> int:
    """Distinct empty cells adjacent to any stone of *group*."""
    liberties: set[int] = set()
    for idx in group:
        for nb in table[idx]:
            if board.at_index(nb) is None:
                liberties.add(nb)
    return len(liberties)


def _capture_around(
    board: Board, index: int, color: Color, table: tuple[tuple[int, ...], ...]
) -> int:
    """Remove opponent groups next to *index* left without liberties."""
    opponent = color.opposite
    captured = 0
    for nb in table[index]:
        if board.at_index(nb) != opponent:
            continue
        group = _flood(board, nb, table)
        if _liberty_count(board, group, table) == 0:
            for idx in group:
                board.clear_index(idx)
            captured += len(group)
    return captured


# ── Queries ─────────────────────────────────────────────────────────────────


def group_at(board: Board, cell: Cell, topology: Topology) -> frozenset[Cell]:
    """The connected same-color group through *cell* (empty if no stone)."""
    row, col = cell
    start = _check_cell(board, row, col)
    size = board.size
    table = neighbor_table(size, topology)
    return frozenset(divmod(idx, size) for idx in _flood(board, start, table))


def liberties_of(board: Board, group: Collection[Cell], topology: Topology) -> int:
    """Number of distinct empty cells adjacent to *group*."""
    size = board.size
    table = neighbor_table(size, topology)
    indexes = [_check_cell(board, row, col) for row, col in group]
    return _liberty_count(board, indexes, table)


# ── Legality ────────────────────────────────────────────────────────────────


def check_placement(
    board: Board,
    row: int,
    col: int,
    color: Color,
    topology: Topology,
    previous_fingerprint: str | None = None,
    history: Collection[str] | None = None,
) -> Rejection | None:
    """Why placing *color* on ``(row, col)`` is illegal, or ``None`` if legal.

    The stone is tried on a scratch copy: opponent groups left without
    liberties are removed first, then the placed group must have a liberty
    unless something was captured, and finally the resulting position must
    differ from *previous_fingerprint* (simple ko) and, when *history* is
    given, from every earlier position (positional superko).
    """
    index = _check_cell(board, row, col)
    if board.at_index(index) is not None:
        return Rejection.OCCUPIED_CELL

    table = neighbor_table(board.size, topology)
    scratch = board.copy()
    scratch[row, col] = color
    captured = _capture_around(scratch, index, color, table)

    own = _flood(scratch, index, table)
    if captured == 0 and _liberty_count(scratch, own, table) == 0:
        return Rejection.SUICIDE_MOVE

    fingerprint = scratch.fingerprint()
    if previous_fingerprint is not None and fingerprint == previous_fingerprint:
        return Rejection.KO_VIOLATION
    if history is not None and fingerprint in history:
        return Rejection.SUPERKO_VIOLATION
    return None


def is_legal_placement(
    board: Board,
    row: int,
    col: int,
    color: Color,
    topology: Topology,
    previous_fingerprint: str | None = None,
) -> bool:
    return check_placement(board, row, col, color, topology, previous_fingerprint) is None


# ── Mutation ────────────────────────────────────────────────────────────────


def apply_placement(
    board: Board, row: int, col: int, color: Color, topology: Topology
) -> PlacementResult:
    """Place a stone on *board* in place and remove the groups it captures.

    Caller is responsible for the legality check.
    """
    index = _check_cell(board, row, col)
    if board.at_index(index) is not None:
        raise ValueError(f"Cannot place on occupied cell ({row}, {col})")

    before = board.fingerprint()
    table = neighbor_table(board.size, topology)
    board[row, col] = color
    captured = _capture_around(board, index, color, table)
    return PlacementResult(
        cell=(row, col),
        color=color,
        captured=captured,
        fingerprint_before=before,
        fingerprint_after=board.fingerprint(),
    )
