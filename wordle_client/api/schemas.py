"""
Pydantic Schemas for the HTTP backend.

These models define the contract between a browser front end and the
client engine. The front end renders GameStateResponse and sends key
presses back; it never talks to the evaluator directly.
"""

from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.state import GameState, GameStatus, Mark


class GuessInfo(BaseModel):
    """A completed guess with its feedback."""
    word: str
    feedback: list[Mark]


class GameStateResponse(BaseModel):
    """Read-only snapshot of the game."""
    game_id: Optional[str] = None
    status: GameStatus
    guesses: list[GuessInfo] = Field(default_factory=list)
    draft: str = ""
    message: str = ""
    attempt_count: int = 0
    attempts_left: int = 0
    letter_statuses: dict[str, Mark] = Field(
        default_factory=dict, description="Uppercase letter -> strongest mark"
    )
    pending: bool = Field(False, description="A guess is waiting on the evaluator")
    halted: bool = Field(False, description="Out of sync; only restart is possible")
    api_version: str = "v1"

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateResponse":
        return cls(
            game_id=state.game_id,
            status=state.status,
            guesses=[
                GuessInfo(word=g.word, feedback=list(g.feedback))
                for g in state.guesses
            ],
            draft=state.draft,
            message=state.message,
            attempt_count=state.attempt_count,
            attempts_left=state.attempts_left,
            letter_statuses=dict(state.letter_statuses),
            pending=state.pending,
            halted=state.halted,
        )


class KeyPressRequest(BaseModel):
    """A raw key from either keyboard."""
    key: str = Field(..., min_length=1, max_length=32)


class KeyPressResponse(BaseModel):
    """Result of a key press."""
    accepted: bool = Field(..., description="The key became an action the game took")
    error_code: Optional[str] = None
    state_changed: bool = Field(False, description="The key changed the game snapshot")
    game_state: GameStateResponse


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
