"""Game management layer: state machine and controller.

Quick start::

    from consolechess.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit("e2e4")
"""

from consolechess.game.controller import GameController, GameEvents
from consolechess.game.interfaces import GameEndReason, GamePhase, IGameController
from consolechess.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
]
