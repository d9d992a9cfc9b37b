"""
Tests for the reducer (state transitions).

Tests:
- Draft editing
- Local submit validation
- Evaluator outcomes
- Status transitions
"""

import random

import pytest

from ..engine_core.state import GameState, GameStatus, GuessEvaluation, Mark, WORD_LENGTH
from ..engine_core.action import Action, ActionType
from ..engine_core.reducer import (
    Reducer,
    apply_action,
    NOT_ENOUGH_LETTERS,
    NETWORK_ERROR,
    OUT_OF_SYNC,
)
from .conftest import evaluation


def submitted(state: GameState) -> GameState:
    """Run SUBMIT_GUESS and return the pending state."""
    result = apply_action(state, Action.submit_guess())
    assert result.needs_evaluation
    return result.new_state


class TestDraftEditing:
    """Tests for append/delete."""

    def test_append_lowercases(self, playing_state):
        result = apply_action(playing_state, Action.append_letter("Q"))

        assert result.success
        assert result.new_state.draft == "q"

    def test_append_clears_message(self, playing_state):
        state = playing_state._copy_with(message="Not in word list")
        result = apply_action(state, Action.append_letter("a"))
        assert result.new_state.message == ""

    def test_append_when_full_is_ignored(self, playing_state):
        state = playing_state._copy_with(draft="abcde", message="keep me")
        result = apply_action(state, Action.append_letter("f"))

        assert not result.success
        assert result.error_code == "DRAFT_FULL"
        assert result.new_state is None

    @pytest.mark.parametrize("bad", ["", "ab", "1", " ", "é", None])
    def test_append_non_letter_is_ignored(self, playing_state, bad):
        result = apply_action(playing_state, Action.append_letter(bad))
        assert result.error_code == "INVALID_LETTER"
        assert result.new_state is None

    def test_delete_removes_last(self, playing_state):
        state = playing_state._copy_with(draft="abc")
        result = apply_action(state, Action.delete_letter())
        assert result.new_state.draft == "ab"

    def test_delete_on_empty_is_ignored(self, playing_state):
        result = apply_action(playing_state, Action.delete_letter())
        assert result.error_code == "DRAFT_EMPTY"
        assert result.new_state is None

    def test_draft_length_stays_in_bounds(self, playing_state):
        """Random edit sequences never leave 0..WORD_LENGTH."""
        rng = random.Random(1234)
        state = playing_state
        for _ in range(500):
            if rng.random() < 0.6:
                action = Action.append_letter(rng.choice("abcdefghij"))
            else:
                action = Action.delete_letter()
            result = apply_action(state, action)
            if result.new_state is not None:
                state = result.new_state
            assert 0 <= len(state.draft) <= WORD_LENGTH


class TestSubmitValidation:
    """Tests for SUBMIT_GUESS before the evaluator is involved."""

    @pytest.mark.parametrize("draft", ["", "a", "abcd"])
    def test_short_draft_rejected_locally(self, playing_state, draft):
        state = playing_state._copy_with(draft=draft)
        result = apply_action(state, Action.submit_guess())

        assert not result.success
        assert not result.needs_evaluation
        assert result.error_code == "NOT_ENOUGH_LETTERS"
        assert result.new_state.message == NOT_ENOUGH_LETTERS
        assert result.new_state.draft == draft
        assert not result.new_state.pending

    def test_full_draft_goes_pending(self, playing_state):
        state = playing_state._copy_with(draft="crane")
        result = apply_action(state, Action.submit_guess())

        assert result.success
        assert result.needs_evaluation
        assert result.new_state.pending
        assert result.new_state.draft == "crane"

    def test_pending_blocks_all_player_actions(self, playing_state):
        state = submitted(playing_state._copy_with(draft="crane"))

        for action in [Action.append_letter("a"), Action.delete_letter(), Action.submit_guess()]:
            result = apply_action(state, action)
            assert result.error_code == "SUBMISSION_PENDING"
            assert result.new_state is None


class TestNonPlayingStates:
    """No input outside PLAYING."""

    @pytest.mark.parametrize("status", [GameStatus.LOADING, GameStatus.WON, GameStatus.LOST])
    @pytest.mark.parametrize("action", [
        Action.append_letter("a"),
        Action.delete_letter(),
        Action.submit_guess(),
    ])
    def test_input_ignored(self, status, action):
        state = GameState(game_id="g", status=status, draft="ab")
        result = apply_action(state, action)

        assert not result.success
        assert result.error_code == "NOT_PLAYING"
        assert result.new_state is None

    def test_halted_ignores_input(self, playing_state):
        state = playing_state._copy_with(halted=True, draft="abcde")
        result = apply_action(state, Action.submit_guess())
        assert result.error_code == "SESSION_HALTED"


class TestEvaluatorOutcomes:
    """Tests for applying evaluator verdicts."""

    def test_accepted_guess_recorded(self, playing_state):
        state = submitted(playing_state._copy_with(draft="crane"))
        result = apply_action(state, Action.guess_evaluated("crane", evaluation("xgyxx", 1)))

        new_state = result.new_state
        assert result.success
        assert len(new_state.guesses) == 1
        assert new_state.guesses[0].word == "crane"
        assert new_state.attempt_count == 1
        assert new_state.draft == ""
        assert not new_state.pending
        assert new_state.status is GameStatus.PLAYING
        assert new_state.letter_statuses["R"] is Mark.GREEN
        assert new_state.letter_statuses["A"] is Mark.YELLOW

    def test_correct_guess_wins(self, playing_state):
        state = submitted(playing_state._copy_with(draft="grate"))
        result = apply_action(state, Action.guess_evaluated("grate", evaluation("ggggg", 1)))
        assert result.new_state.status is GameStatus.WON

    def test_correct_on_sixth_attempt_wins(self, playing_state):
        state = playing_state
        for i in range(5):
            state = submitted(state._copy_with(draft="wrong"))
            state = apply_action(
                state, Action.guess_evaluated("wrong", evaluation("xxxxx", i + 1))
            ).new_state
        state = submitted(state._copy_with(draft="right"))
        result = apply_action(state, Action.guess_evaluated("right", evaluation("ggggg", 6)))

        assert result.new_state.status is GameStatus.WON

    def test_sixth_wrong_guess_loses(self, playing_state):
        state = playing_state
        for i in range(6):
            state = submitted(state._copy_with(draft="wrong"))
            state = apply_action(
                state, Action.guess_evaluated("wrong", evaluation("xxxyx", i + 1))
            ).new_state

        assert state.status is GameStatus.LOST
        assert state.attempt_count == len(state.guesses) == 6

    def test_attempt_count_mismatch_halts(self, state_with_guess):
        state = submitted(state_with_guess)
        result = apply_action(state, Action.guess_evaluated("afcgh", evaluation("gygxx", 3)))

        assert not result.success
        assert result.error_code == "PROTOCOL_MISMATCH"
        assert result.new_state.halted
        assert result.new_state.message == OUT_OF_SYNC
        assert len(result.new_state.guesses) == 1
        assert result.new_state.status is GameStatus.PLAYING

    def test_malformed_feedback_is_network_error(self, playing_state):
        state = submitted(playing_state._copy_with(draft="crane"))
        short = GuessEvaluation(feedback=(Mark.GRAY,) * 4, correct=False, attempt_count=1)
        result = apply_action(state, Action.guess_evaluated("crane", short))

        assert result.error_code == "MALFORMED_FEEDBACK"
        assert result.new_state.message == NETWORK_ERROR
        assert result.new_state.draft == "crane"
        assert not result.new_state.pending

    def test_rejection_keeps_draft(self, playing_state):
        state = submitted(playing_state._copy_with(draft="xxxxx"))
        result = apply_action(state, Action.guess_rejected("Not a valid word"))

        assert result.new_state.message == "Not a valid word"
        assert result.new_state.draft == "xxxxx"
        assert not result.new_state.pending
        assert result.new_state.status is GameStatus.PLAYING

    def test_failure_keeps_draft(self, playing_state):
        state = submitted(playing_state._copy_with(draft="crane"))
        result = apply_action(state, Action.evaluator_failed(NETWORK_ERROR))

        assert result.new_state.message == NETWORK_ERROR
        assert result.new_state.draft == "crane"
        assert result.new_state.guesses == ()

    def test_outcome_without_pending_fails(self, playing_state):
        result = apply_action(
            playing_state, Action.guess_evaluated("crane", evaluation("xxxxx", 1))
        )
        assert result.error_code == "INVALID_ACTION"
        assert result.new_state is None


class TestGameStart:
    """Tests for LOADING -> PLAYING."""

    def test_game_started(self):
        result = apply_action(GameState(message="Failed to start game."), Action.game_started("g1"))

        assert result.success
        assert result.new_state.status is GameStatus.PLAYING
        assert result.new_state.game_id == "g1"
        assert result.new_state.message == ""

    def test_start_failed_stays_loading(self):
        result = apply_action(GameState(), Action.start_failed("Failed to start game."))

        assert result.new_state.status is GameStatus.LOADING
        assert result.new_state.message == "Failed to start game."

    def test_cannot_start_twice(self, playing_state):
        result = apply_action(playing_state, Action.game_started("other"))
        assert result.error_code == "INVALID_ACTION"

    def test_empty_game_id_is_a_failure(self):
        result = apply_action(GameState(), Action.game_started(""))
        assert result.error_code == "MISSING_GAME_ID"
        assert result.new_state.status is GameStatus.LOADING


class TestReducerConfig:
    def test_custom_word_length(self, playing_state):
        reducer = Reducer(word_length=3)
        state = playing_state._copy_with(draft="abc")
        result = reducer.apply(state, Action.submit_guess())
        assert result.needs_evaluation

    def test_action_types(self):
        assert Action.submit_guess().action_type is ActionType.SUBMIT_GUESS
        assert Action.submit_guess().is_player_action
        assert not Action.game_started("g").is_player_action
