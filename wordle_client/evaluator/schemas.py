"""
Pydantic Schemas for the evaluator's wire format.

    POST /start  ->  {"game_id": "..."}
    POST /guess  <-  {"game_id": "...", "guess": "crane"}
                 ->  {"feedback": ["gray", ...], "correct": false, "guesses": 1}
    errors       ->  {"detail": "Not a valid word"}
"""

from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from ..engine_core.state import Mark, GuessEvaluation, WORD_LENGTH


class StartGameResponse(BaseModel):
    """Response to POST /start."""
    game_id: str = Field(..., min_length=1)

    @field_validator("game_id", mode="before")
    @classmethod
    def coerce_game_id(cls, value: Any) -> Any:
        # Some servers hand out integer ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class GuessRequest(BaseModel):
    """Body of POST /guess."""
    game_id: str
    guess: str = Field(..., min_length=WORD_LENGTH, max_length=WORD_LENGTH)


class GuessResponse(BaseModel):
    """Response to an accepted POST /guess."""
    feedback: list[Mark] = Field(..., min_length=WORD_LENGTH, max_length=WORD_LENGTH)
    correct: bool
    guesses: int = Field(..., ge=1, description="Attempts used so far, this one included")

    @field_validator("feedback", mode="before")
    @classmethod
    def normalize_marks(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [v.lower() if isinstance(v, str) else v for v in value]
        return value

    def to_evaluation(self) -> GuessEvaluation:
        return GuessEvaluation(
            feedback=tuple(self.feedback),
            correct=self.correct,
            attempt_count=self.guesses,
        )


class ErrorDetail(BaseModel):
    """Error body; FastAPI-style servers put the reason in `detail`."""
    detail: Optional[Any] = None

    @property
    def reason(self) -> Optional[str]:
        if isinstance(self.detail, str) and self.detail.strip():
            return self.detail
        return None
