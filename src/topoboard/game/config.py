"""Game configuration: which game, which topology, what size."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

from topoboard.core.board import CHESS_SIZE
from topoboard.core.enums import GameKind, Topology

GO_MIN_SIZE: Final = 5
GO_MAX_SIZE: Final = 25
GO_DEFAULT_SIZE: Final = 19


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable session configuration.

    Args:
        kind: Chess or Go.
        topology: Edge policy shared by move generation and liberty counting.
        board_size: Side length; ``None`` picks 8 for chess and 19 for Go.
        superko: Go only.  Reject any placement that repeats an earlier
            position instead of only the immediately preceding one.
    """

    kind: GameKind = GameKind.CHESS
    topology: Topology = Topology.CLASSIC
    board_size: int | None = None
    superko: bool = False

    def __post_init__(self) -> None:
        if self.board_size is None:
            default = CHESS_SIZE if self.kind == GameKind.CHESS else GO_DEFAULT_SIZE
            object.__setattr__(self, "board_size", default)
        size = self.board_size
        if self.kind == GameKind.CHESS and size != CHESS_SIZE:
            raise ValueError(f"Chess is played on {CHESS_SIZE}x{CHESS_SIZE}, got {size}")
        if self.kind == GameKind.GO and not (GO_MIN_SIZE <= size <= GO_MAX_SIZE):
            raise ValueError(
                f"Go board size must be between {GO_MIN_SIZE} and {GO_MAX_SIZE}, got {size}"
            )
        if self.superko and self.kind != GameKind.GO:
            raise ValueError("Superko only applies to Go")

    @property
    def size(self) -> int:
        assert self.board_size is not None
        return self.board_size

    # Common presets
    @classmethod
    def chess(cls, topology: Topology = Topology.CLASSIC) -> GameConfig:
        return cls(GameKind.CHESS, topology)

    @classmethod
    def go_19x19(cls, topology: Topology = Topology.CLASSIC) -> GameConfig:
        return cls(GameKind.GO, topology, 19)

    @classmethod
    def go_13x13(cls, topology: Topology = Topology.CLASSIC) -> GameConfig:
        return cls(GameKind.GO, topology, 13)

    @classmethod
    def go_9x9(cls, topology: Topology = Topology.CLASSIC) -> GameConfig:
        return cls(GameKind.GO, topology, 9)

    @classmethod
    def from_names(
        cls,
        kind: str,
        topology: str = "classic",
        board_size: int | None = None,
        *,
        superko: bool = False,
    ) -> GameConfig:
        """Build a config from user-facing names, e.g. ``("go", "mirror", 9)``."""
        return cls(GameKind.parse(kind), Topology.parse(topology), board_size, superko)

    def with_topology(self, topology: Topology) -> GameConfig:
        return replace(self, topology=topology)

    def __repr__(self) -> str:
        extra = ", superko" if self.superko else ""
        return f"GameConfig({self.kind} {self.size}x{self.size}, {self.topology}{extra})"
