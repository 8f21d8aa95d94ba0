"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from topoboard.core.enums import PieceType
from topoboard.core.types import Cell

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``reflected`` records that the destination was reached across a mirror
    seam; a pawn making such a move reverses its direction.
    """

    from_cell: Cell
    to_cell: Cell
    reflected: bool = False
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        (fr, fc), (tr, tc) = self.from_cell, self.to_cell
        base = f"{fr},{fc}-{tr},{tc}"
        if self.reflected:
            base += "~"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
