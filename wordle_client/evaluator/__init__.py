"""
Evaluator Module - Talks to the remote game server.

The evaluator owns the secret word and the matching rules. The client only
ever sees its verdicts:
- start_game() hands out a game id
- submit_guess() returns feedback, or a rejection reason, or fails

Nothing here evaluates guesses locally.
"""

from .errors import EvaluatorError, EvaluatorUnavailable, GuessRejected
from .client import EvaluatorClient, HttpEvaluatorClient
from .schemas import StartGameResponse, GuessRequest, GuessResponse, ErrorDetail

__all__ = [
    "EvaluatorError",
    "EvaluatorUnavailable",
    "GuessRejected",
    "EvaluatorClient",
    "HttpEvaluatorClient",
    "StartGameResponse",
    "GuessRequest",
    "GuessResponse",
    "ErrorDetail",
]
