"""Coordinate folding for the three board topologies.

``classic``
    No wrap.  Coordinates outside ``[0, size)`` do not exist.
``rollover``
    Torus.  Both axes wrap with no change of orientation.
``mirror``
    Columns wrap as on the torus.  Rows wrap through a mirror: walking off the
    top edge re-enters on the same edge with the board flipped, so the row
    axis has period ``2 * size`` and the second half is reflected.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import Final

from topoboard.core.enums import Topology
from topoboard.core.types import Cell

ORTHOGONAL: Final = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass(frozen=True, slots=True)
class Canonical:
    """An in-range cell plus whether reaching it crossed a mirror seam."""

    row: int
    col: int
    reflected: bool = False

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


def canonicalize(row: int, col: int, size: int, topology: Topology) -> Canonical | None:
    """Fold a raw coordinate onto the board.

    Returns ``None`` when the coordinate falls off a ``classic`` board; the
    wrapping topologies are total.
    """
    if size <= 0:
        raise ValueError(f"Board size must be positive, got {size}")

    if topology == Topology.CLASSIC:
        if 0 <= row < size and 0 <= col < size:
            return Canonical(row, col)
        return None

    # Python's % is already non-negative for a positive modulus.
    canon_col = col % size
    if topology == Topology.ROLLOVER:
        return Canonical(row % size, canon_col)

    folded = row % (2 * size)
    if folded >= size:
        return Canonical(2 * size - 1 - folded, canon_col, True)
    return Canonical(folded, canon_col)


def neighbors(row: int, col: int, size: int, topology: Topology) -> list[Cell]:
    """Orthogonal neighbours of a canonical cell.

    Edge cells of a classic board have fewer than four.  On a mirror board an
    edge cell reflects onto itself across the seam, so it may appear in its
    own neighbour list.
    """
    result: list[Cell] = []
    for dr, dc in ORTHOGONAL:
        canon = canonicalize(row + dr, col + dc, size, topology)
        if canon is not None:
            result.append(canon.cell)
    return result


@cache
def neighbor_table(size: int, topology: Topology) -> tuple[tuple[int, ...], ...]:
    """Row-major neighbour indexes for every cell of a *size* board."""
    table: list[tuple[int, ...]] = []
    for row in range(size):
        for col in range(size):
            table.append(
                tuple(r * size + c for r, c in neighbors(row, col, size, topology))
            )
    return tuple(table)
