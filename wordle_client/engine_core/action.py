"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player edits (append letter, delete letter, submit guess)
2. Evaluator outcomes (game started, guess evaluated, guess rejected, failure)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import GuessEvaluation


class ActionType(Enum):
    """Types of actions in the system."""
    # Player actions
    APPEND_LETTER = "append_letter"
    DELETE_LETTER = "delete_letter"
    SUBMIT_GUESS = "submit_guess"

    # Evaluator outcomes
    GAME_STARTED = "game_started"
    START_FAILED = "start_failed"
    GUESS_EVALUATED = "guess_evaluated"
    GUESS_REJECTED = "guess_rejected"
    EVALUATOR_FAILED = "evaluator_failed"


PLAYER_ACTIONS = frozenset({
    ActionType.APPEND_LETTER,
    ActionType.DELETE_LETTER,
    ActionType.SUBMIT_GUESS,
})


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    letter: str | None = None
    word: str | None = None
    game_id: str | None = None
    evaluation: GuessEvaluation | None = None
    message: str | None = None


@dataclass
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @property
    def is_player_action(self) -> bool:
        return self.action_type in PLAYER_ACTIONS

    @classmethod
    def append_letter(cls, letter: str) -> Action:
        """Factory for typing a letter."""
        return cls(
            action_type=ActionType.APPEND_LETTER,
            payload=ActionPayload(letter=letter),
        )

    @classmethod
    def delete_letter(cls) -> Action:
        return cls(action_type=ActionType.DELETE_LETTER)

    @classmethod
    def submit_guess(cls) -> Action:
        return cls(action_type=ActionType.SUBMIT_GUESS)

    @classmethod
    def game_started(cls, game_id: str) -> Action:
        return cls(
            action_type=ActionType.GAME_STARTED,
            payload=ActionPayload(game_id=game_id),
        )

    @classmethod
    def start_failed(cls, message: str) -> Action:
        return cls(
            action_type=ActionType.START_FAILED,
            payload=ActionPayload(message=message),
        )

    @classmethod
    def guess_evaluated(cls, word: str, evaluation: GuessEvaluation) -> Action:
        """Factory for an accepted guess and its feedback."""
        return cls(
            action_type=ActionType.GUESS_EVALUATED,
            payload=ActionPayload(word=word, evaluation=evaluation),
        )

    @classmethod
    def guess_rejected(cls, reason: str) -> Action:
        return cls(
            action_type=ActionType.GUESS_REJECTED,
            payload=ActionPayload(message=reason),
        )

    @classmethod
    def evaluator_failed(cls, message: str) -> Action:
        return cls(
            action_type=ActionType.EVALUATOR_FAILED,
            payload=ActionPayload(message=message),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if the state changed, even on failure)
    - Errors (if failed)
    - Whether the guess must now go to the evaluator
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    # Set by SUBMIT_GUESS when the draft passed local validation
    needs_evaluation: bool = False

    # For logging/presentation
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        state: Any | None = None,
    ) -> ActionResult:
        """Create a failure result, optionally carrying a changed state."""
        return cls(success=False, new_state=state, error=error, error_code=error_code)

    @classmethod
    def ignored(cls, reason: str, error_code: str) -> ActionResult:
        """Create a result for input that was dropped without effect."""
        return cls(success=False, error=reason, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        needs_evaluation: bool = False,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            needs_evaluation=needs_evaluation,
        )
