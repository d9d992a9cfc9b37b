"""
Pytest fixtures for wordle client tests.
"""

import pytest

from ..engine_core.state import GameState, GameStatus, Guess, GuessEvaluation, Mark
from ..evaluator import EvaluatorClient
from ..session import Session, InputDispatcher


MARK_CODES = {"g": Mark.GREEN, "y": Mark.YELLOW, "x": Mark.GRAY}


def marks(code: str) -> tuple[Mark, ...]:
    """marks("gxyxx") -> (GREEN, GRAY, YELLOW, GRAY, GRAY)"""
    return tuple(MARK_CODES[c] for c in code)


def evaluation(code: str, attempt_count: int, correct: bool | None = None) -> GuessEvaluation:
    if correct is None:
        correct = code == "ggggg"
    return GuessEvaluation(feedback=marks(code), correct=correct, attempt_count=attempt_count)


class ScriptedEvaluator(EvaluatorClient):
    """
    Evaluator that replays canned answers.

    `starts` and `replies` are consumed in order; an Exception instance is
    raised instead of returned. A callable start is called with no
    arguments and a callable reply with (game_id, word), and the result
    used. This lets tests act while a call is in flight.
    """

    def __init__(self, starts=None, replies=None):
        self.starts = list(starts or ["game-1"])
        self.replies = list(replies or [])
        self.start_calls = 0
        self.submissions: list[tuple[str, str]] = []

    def start_game(self) -> str:
        self.start_calls += 1
        answer = self.starts.pop(0)
        if callable(answer):
            answer = answer()
        if isinstance(answer, Exception):
            raise answer
        return answer

    def submit_guess(self, game_id: str, word: str) -> GuessEvaluation:
        self.submissions.append((game_id, word))
        answer = self.replies.pop(0)
        if callable(answer):
            answer = answer(game_id, word)
        if isinstance(answer, Exception):
            raise answer
        return answer


def type_word(session: Session, word: str):
    for letter in word:
        session.append_letter(letter)


@pytest.fixture
def evaluator() -> ScriptedEvaluator:
    return ScriptedEvaluator(starts=["game-1", "game-2", "game-3"])


@pytest.fixture
def session(evaluator) -> Session:
    """A session that has not been started yet."""
    return Session(evaluator)


@pytest.fixture
def playing_session(session) -> Session:
    """A started session with an empty board."""
    result = session.start()
    assert result.success
    return session


@pytest.fixture
def dispatcher(playing_session) -> InputDispatcher:
    return InputDispatcher(playing_session)


@pytest.fixture
def playing_state() -> GameState:
    return GameState(game_id="game-1", status=GameStatus.PLAYING)


@pytest.fixture
def state_with_guess(playing_state) -> GameState:
    """One completed guess and a full draft."""
    guess = Guess(word="abcde", feedback=marks("gxyxx"))
    return playing_state._copy_with(
        guesses=(guess,),
        attempt_count=1,
        draft="afcgh",
        letter_statuses={"A": Mark.GREEN, "B": Mark.GRAY, "C": Mark.YELLOW,
                         "D": Mark.GRAY, "E": Mark.GRAY},
    )
