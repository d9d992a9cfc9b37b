"""
Game State - Immutable state container for one game.

Design principles:
- Immutable: all mutations return new state
- Derived data (letter coloring) is a projection of the guess history
- Owned by exactly one Session
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping


WORD_LENGTH = 5
MAX_ATTEMPTS = 6


class Mark(str, Enum):
    """Per-letter feedback from the evaluator."""
    GREEN = "green"  # Right letter, right position
    YELLOW = "yellow"  # In the word, wrong position
    GRAY = "gray"  # Not in the word

    @property
    def rank(self) -> int:
        """Precedence used when merging marks: green beats yellow beats gray."""
        return _MARK_RANK[self]


_MARK_RANK = {Mark.GRAY: 0, Mark.YELLOW: 1, Mark.GREEN: 2}


class GameStatus(str, Enum):
    """High-level game status."""
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_over(self) -> bool:
        return self in {GameStatus.WON, GameStatus.LOST}


@dataclass(frozen=True)
class Guess:
    """
    A completed guess.

    Created only from an accepted evaluator response and never changed.
    """
    word: str
    feedback: tuple[Mark, ...]

    def __post_init__(self):
        object.__setattr__(self, "feedback", tuple(Mark(m) for m in self.feedback))
        if len(self.word) != len(self.feedback):
            raise ValueError(
                f"Guess {self.word!r} has {len(self.feedback)} marks, "
                f"expected {len(self.word)}"
            )


@dataclass(frozen=True)
class GuessEvaluation:
    """The evaluator's verdict on an accepted guess."""
    feedback: tuple[Mark, ...]
    correct: bool
    attempt_count: int

    def __post_init__(self):
        object.__setattr__(self, "feedback", tuple(Mark(m) for m in self.feedback))


def _empty_statuses() -> Mapping[str, Mark]:
    return MappingProxyType({})


@dataclass(frozen=True)
class GameState:
    """
    Complete client-side state of a game at a point in time.

    All transitions go through the reducer. The session swaps the whole
    value on every change, so a snapshot handed out earlier never moves.
    """
    game_id: str | None = None
    status: GameStatus = GameStatus.LOADING

    # Completed guesses in submission order
    guesses: tuple[Guess, ...] = ()
    attempt_count: int = 0

    # Letters typed for the next guess (lowercase)
    draft: str = ""

    # Last error/info text shown to the player ("" when none)
    message: str = ""

    # Uppercase letter -> strongest mark seen so far
    letter_statuses: Mapping[str, Mark] = field(default_factory=_empty_statuses)

    # A submission is waiting on the evaluator
    pending: bool = False

    # Evaluator and client disagree on the attempt count
    halted: bool = False

    def __post_init__(self):
        object.__setattr__(self, "guesses", tuple(self.guesses))
        if not isinstance(self.letter_statuses, MappingProxyType):
            object.__setattr__(
                self, "letter_statuses", MappingProxyType(dict(self.letter_statuses))
            )

    @property
    def accepts_input(self) -> bool:
        """Only a playing, idle, in-sync game can be edited."""
        return (
            self.status is GameStatus.PLAYING
            and not self.pending
            and not self.halted
        )

    @property
    def attempts_left(self) -> int:
        return max(MAX_ATTEMPTS - self.attempt_count, 0)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
