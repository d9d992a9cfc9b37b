"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- Never talks to the evaluator; the session does that between
  SUBMIT_GUESS and the outcome action
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState, GameStatus, Guess, WORD_LENGTH, MAX_ATTEMPTS
from .action import Action, ActionType, ActionResult
from .feedback import merge


NOT_ENOUGH_LETTERS = "Not enough letters"
NETWORK_ERROR = "Network error."
START_FAILED = "Failed to start game."
OUT_OF_SYNC = "Game out of sync with the server. Start a new game."


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """
    word_length: int = WORD_LENGTH
    max_attempts: int = MAX_ATTEMPTS

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error. Player input that
        is not allowed right now comes back as an ignored result and
        leaves the state untouched.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            return rejection

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )
        return handler(state, action)

    def _validate_action(self, state: GameState, action: Action) -> ActionResult | None:
        """
        Check that an action may run in the current state.

        Returns an ignored/failure result if not, None if valid.
        """
        if action.is_player_action:
            if state.halted:
                return ActionResult.ignored("Game is out of sync", "SESSION_HALTED")
            if state.pending:
                return ActionResult.ignored("Guess already submitted", "SUBMISSION_PENDING")
            if state.status is not GameStatus.PLAYING:
                return ActionResult.ignored(
                    f"Game is {state.status.value} - no input accepted",
                    "NOT_PLAYING",
                )
            return None

        if action.action_type in {ActionType.GAME_STARTED, ActionType.START_FAILED}:
            if state.status is not GameStatus.LOADING:
                return ActionResult.failure(
                    "Game already started", error_code="INVALID_ACTION"
                )
            return None

        # Evaluator outcomes only resolve an outstanding submission
        if not state.pending or state.status is not GameStatus.PLAYING:
            return ActionResult.failure(
                "No submission waiting for a result", error_code="INVALID_ACTION"
            )
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.APPEND_LETTER: self._handle_append_letter,
            ActionType.DELETE_LETTER: self._handle_delete_letter,
            ActionType.SUBMIT_GUESS: self._handle_submit_guess,
            ActionType.GAME_STARTED: self._handle_game_started,
            ActionType.START_FAILED: self._handle_start_failed,
            ActionType.GUESS_EVALUATED: self._handle_guess_evaluated,
            ActionType.GUESS_REJECTED: self._handle_guess_rejected,
            ActionType.EVALUATOR_FAILED: self._handle_evaluator_failed,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Player actions
    # =========================================================================

    def _handle_append_letter(self, state: GameState, action: Action) -> ActionResult:
        letter = action.payload.letter
        if not is_letter(letter):
            return ActionResult.ignored(f"Not a letter: {letter!r}", "INVALID_LETTER")
        if len(state.draft) >= self.word_length:
            return ActionResult.ignored("Draft is full", "DRAFT_FULL")

        new_state = state._copy_with(draft=state.draft + letter.lower(), message="")
        return ActionResult.success_with_state(
            new_state, changes=[f"Typed {letter.upper()}"]
        )

    def _handle_delete_letter(self, state: GameState, action: Action) -> ActionResult:
        if not state.draft:
            return ActionResult.ignored("Draft is empty", "DRAFT_EMPTY")

        new_state = state._copy_with(draft=state.draft[:-1], message="")
        return ActionResult.success_with_state(
            new_state, changes=[f"Deleted {state.draft[-1].upper()}"]
        )

    def _handle_submit_guess(self, state: GameState, action: Action) -> ActionResult:
        """
        Validate the draft locally.

        A complete draft marks the state pending; the caller is then
        expected to ask the evaluator and feed back exactly one outcome.
        """
        if len(state.draft) != self.word_length:
            return ActionResult.failure(
                NOT_ENOUGH_LETTERS,
                error_code="NOT_ENOUGH_LETTERS",
                state=state._copy_with(message=NOT_ENOUGH_LETTERS),
            )

        return ActionResult.success_with_state(
            state._copy_with(pending=True),
            changes=[f"Submitted {state.draft.upper()}"],
            needs_evaluation=True,
        )

    # =========================================================================
    # Evaluator outcomes
    # =========================================================================

    def _handle_game_started(self, state: GameState, action: Action) -> ActionResult:
        game_id = action.payload.game_id
        if not game_id:
            return ActionResult.failure(
                START_FAILED,
                error_code="MISSING_GAME_ID",
                state=state._copy_with(message=START_FAILED),
            )

        # Nothing from a previous game survives
        new_state = GameState(game_id=game_id, status=GameStatus.PLAYING)
        return ActionResult.success_with_state(
            new_state, changes=[f"Started game {game_id}"]
        )

    def _handle_start_failed(self, state: GameState, action: Action) -> ActionResult:
        message = action.payload.message or START_FAILED
        return ActionResult.failure(
            message,
            error_code="START_FAILED",
            state=state._copy_with(message=message),
        )

    def _handle_guess_evaluated(self, state: GameState, action: Action) -> ActionResult:
        """Record an accepted guess and settle the game status."""
        word = action.payload.word or ""
        evaluation = action.payload.evaluation

        if (
            evaluation is None
            or len(word) != self.word_length
            or len(evaluation.feedback) != self.word_length
        ):
            return ActionResult.failure(
                NETWORK_ERROR,
                error_code="MALFORMED_FEEDBACK",
                state=state._copy_with(pending=False, message=NETWORK_ERROR),
            )

        expected_count = len(state.guesses) + 1
        if evaluation.attempt_count != expected_count:
            # Do not trust either side; the draft stays for inspection
            return ActionResult.failure(
                f"Evaluator reports {evaluation.attempt_count} attempts, "
                f"client has {expected_count}",
                error_code="PROTOCOL_MISMATCH",
                state=state._copy_with(pending=False, halted=True, message=OUT_OF_SYNC),
            )

        guess = Guess(word=word.lower(), feedback=evaluation.feedback)
        if evaluation.correct:
            status = GameStatus.WON
        elif evaluation.attempt_count >= self.max_attempts:
            status = GameStatus.LOST
        else:
            status = GameStatus.PLAYING

        new_state = state._copy_with(
            guesses=state.guesses + (guess,),
            attempt_count=evaluation.attempt_count,
            draft="",
            message="",
            letter_statuses=merge(state.letter_statuses, guess.word, guess.feedback),
            pending=False,
            status=status,
        )
        changes = [f"{guess.word.upper()}: {' '.join(m.value for m in guess.feedback)}"]
        if status is not GameStatus.PLAYING:
            changes.append(f"Game {status.value}")
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_guess_rejected(self, state: GameState, action: Action) -> ActionResult:
        reason = action.payload.message or "Error."
        return ActionResult.failure(
            reason,
            error_code="GUESS_REJECTED",
            state=state._copy_with(pending=False, message=reason),
        )

    def _handle_evaluator_failed(self, state: GameState, action: Action) -> ActionResult:
        message = action.payload.message or NETWORK_ERROR
        return ActionResult.failure(
            message,
            error_code="EVALUATOR_FAILED",
            state=state._copy_with(pending=False, message=message),
        )


def is_letter(value: object) -> bool:
    """True for a single ASCII letter."""
    return (
        isinstance(value, str)
        and len(value) == 1
        and value.isascii()
        and value.isalpha()
    )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
