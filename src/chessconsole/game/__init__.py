"""Game management layer — turn controller and session state.

Quick start::

    from chessconsole.core.types import E2, E4
    from chessconsole.game import GameController

    ctrl = GameController()
    ctrl.select(E2)  # pick up the pawn
    ctrl.select(E4)  # and move it
"""

from chessconsole.game.controller import GameController, GameEvents
from chessconsole.game.interfaces import (
    GameEndReason,
    GameOptions,
    IGameController,
    PlayerState,
)
from chessconsole.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GameOptions",
    "IGameController",
    "PlayerState",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
]
