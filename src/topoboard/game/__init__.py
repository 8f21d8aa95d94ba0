"""Game management layer - configuration, session, state machine.

Quick start::

    from topoboard.core import Topology
    from topoboard.game import GameConfig, GameSession

    session = GameSession(GameConfig.go_9x9(Topology.ROLLOVER))
    session.attempt_go_placement(4, 4)
    session.pass_turn()
"""

from topoboard.game.config import GameConfig
from topoboard.game.interfaces import GameEndReason, GamePhase, IGameSession
from topoboard.game.session import GameSession, SessionEvents
from topoboard.game.state import (
    ActionRecord,
    GameState,
    MoveRecord,
    PassRecord,
    PlacementRecord,
    SessionSnapshot,
)

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameSession",
    # Concrete
    "ActionRecord",
    "GameConfig",
    "GameSession",
    "GameState",
    "MoveRecord",
    "PassRecord",
    "PlacementRecord",
    "SessionEvents",
    "SessionSnapshot",
]
