"""
Engine Core - Deterministic game state and transitions.

The engine:
1. Holds GameState as an immutable value
2. Turns player intent into Actions
3. Applies actions via the reducer
4. Derives keyboard coloring from the guess history
"""

from .state import (
    Mark,
    GameStatus,
    Guess,
    GuessEvaluation,
    GameState,
    WORD_LENGTH,
    MAX_ATTEMPTS,
)
from .feedback import merge, letter_statuses
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action

__all__ = [
    "Mark",
    "GameStatus",
    "Guess",
    "GuessEvaluation",
    "GameState",
    "WORD_LENGTH",
    "MAX_ATTEMPTS",
    "merge",
    "letter_statuses",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
]
