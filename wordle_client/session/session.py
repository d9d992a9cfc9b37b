"""
Session - The state machine for one game against the evaluator.

LIFECYCLE:
1. Session created -> LOADING
2. start() asks the evaluator for a game id -> PLAYING
3. Player edits the draft and submits guesses
4. Evaluator verdicts move the game to WON or LOST
5. restart() throws the game away and starts from scratch

CONCURRENCY:
- One event is processed at a time
- submit_guess() is the only call that waits on the network; while it
  waits the state is `pending` and every other input is dropped
- The pending flag is checked and set under a lock, so two threads can
  never both submit
- Only one start() per game can be waiting on the evaluator

Sessions are EPHEMERAL: nothing is persisted.
"""

from __future__ import annotations
from typing import Callable
import logging
import threading

from ..engine_core.state import GameState, GameStatus
from ..engine_core.action import Action, ActionType, ActionResult
from ..engine_core.reducer import Reducer, NETWORK_ERROR, START_FAILED
from ..evaluator import EvaluatorClient, EvaluatorError, GuessRejected


logger = logging.getLogger(__name__)

Subscriber = Callable[[GameState], None]


class Session:
    """
    Owns the game state and drives it through the reducer.

    Usage:
        session = Session(HttpEvaluatorClient(url))
        session.subscribe(render)
        session.start()

        session.append_letter("c")
        ...
        session.submit_guess()

    Every state change is pushed to subscribers as an immutable GameState,
    which doubles as the read-only snapshot for presentation.
    """

    def __init__(self, evaluator: EvaluatorClient, reducer: Reducer | None = None):
        self.evaluator = evaluator
        self.reducer = reducer or Reducer()
        self._state = GameState()
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []
        # Bumped by restart(); evaluator replies for an older game are dropped
        self._generation = 0
        # Generation whose start() call is waiting on the evaluator
        self._starting: int | None = None

    @property
    def state(self) -> GameState:
        return self._state

    def snapshot(self) -> GameState:
        """Current read-only view of the game."""
        return self._state

    def is_active(self) -> bool:
        """Check if the game can still take input."""
        return self._state.accepts_input

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, state: GameState):
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Session subscriber %r failed", callback)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> ActionResult:
        """
        Ask the evaluator for a new game.

        On failure the session stays LOADING with an error message; the
        caller decides when to try again.
        """
        with self._lock:
            if self._state.status is not GameStatus.LOADING:
                return ActionResult.failure("Game already started", error_code="INVALID_ACTION")
            if self._starting == self._generation:
                return ActionResult.ignored("Game is already starting", "START_IN_PROGRESS")
            generation = self._generation
            self._starting = generation

        try:
            game_id = self.evaluator.start_game()
        except EvaluatorError as e:
            logger.warning("Could not start game: %s", e)
            return self._apply(Action.start_failed(START_FAILED), generation)
        finally:
            with self._lock:
                if self._starting == generation:
                    self._starting = None

        return self._apply(Action.game_started(game_id), generation)

    def restart(self) -> ActionResult:
        """
        Discard the current game entirely and start a new one.

        Any submission still in flight for the old game is forgotten.
        """
        with self._lock:
            self._generation += 1
            self._state = GameState()
        logger.info("Restarting session")
        self._notify(self._state)
        return self.start()

    # =========================================================================
    # Player actions
    # =========================================================================

    def append_letter(self, letter: str) -> ActionResult:
        return self.dispatch(Action.append_letter(letter))

    def delete_letter(self) -> ActionResult:
        return self.dispatch(Action.delete_letter())

    def submit_guess(self) -> ActionResult:
        return self.dispatch(Action.submit_guess())

    def dispatch(self, action: Action) -> ActionResult:
        """
        Apply a player action.

        Evaluator outcomes are internal and cannot be dispatched.
        """
        if not action.is_player_action:
            raise ValueError(f"Not a player action: {action.action_type}")

        generation = self._generation
        result = self._apply(action, generation)
        if not result.needs_evaluation:
            return result
        return self._evaluate(result.new_state, generation)

    def _evaluate(self, submitted: GameState, generation: int) -> ActionResult:
        """Run the evaluator round trip for a state that was just marked pending."""
        word = submitted.draft
        try:
            evaluation = self.evaluator.submit_guess(submitted.game_id, word)
        except GuessRejected as e:
            outcome = Action.guess_rejected(e.reason)
        except EvaluatorError as e:
            logger.warning("Guess %r not evaluated: %s", word, e)
            outcome = Action.evaluator_failed(NETWORK_ERROR)
        except Exception:
            # Clear pending before the bug surfaces
            self._apply(Action.evaluator_failed(NETWORK_ERROR), generation)
            raise
        else:
            outcome = Action.guess_evaluated(word, evaluation)

        result = self._apply(outcome, generation)
        if result.error_code == "PROTOCOL_MISMATCH":
            logger.error(
                "Game %s halted: %s", submitted.game_id, result.error
            )
        return result

    def _apply(self, action: Action, generation: int) -> ActionResult:
        with self._lock:
            if generation != self._generation:
                logger.info(
                    "Dropping %s for a discarded game", action.action_type.value
                )
                return ActionResult.ignored("Game was restarted", "STALE_GAME")

            result = self.reducer.apply(self._state, action)
            if result.new_state is None:
                return result
            self._state = result.new_state

        for change in result.state_changes:
            logger.debug(change)
        if action.action_type is ActionType.GAME_STARTED:
            logger.info("Game %s ready", result.new_state.game_id)
        self._notify(result.new_state)
        return result
