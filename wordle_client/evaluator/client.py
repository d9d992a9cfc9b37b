"""
Evaluator Client - The network round trip for starting games and guessing.

EvaluatorClient is the interface the session depends on. HttpEvaluatorClient
is the production implementation over requests; tests plug in scripted fakes.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import logging

import requests
from pydantic import ValidationError

from ..engine_core.state import GuessEvaluation
from .errors import EvaluatorUnavailable, GuessRejected
from .schemas import StartGameResponse, GuessRequest, GuessResponse, ErrorDetail


logger = logging.getLogger(__name__)


class EvaluatorClient(ABC):
    """
    Abstract evaluator.

    Implementations raise GuessRejected for guesses the evaluator refuses and
    EvaluatorUnavailable for everything else that goes wrong.
    """

    @abstractmethod
    def start_game(self) -> str:
        """Start a new game and return its id."""
        pass

    @abstractmethod
    def submit_guess(self, game_id: str, word: str) -> GuessEvaluation:
        """Submit a five-letter guess for the given game."""
        pass


class HttpEvaluatorClient(EvaluatorClient):
    """
    Evaluator reached over HTTP/JSON.

    Usage:
        client = HttpEvaluatorClient("https://example.org/api")
        game_id = client.start_game()
        evaluation = client.submit_guess(game_id, "crane")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        http: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def start_game(self) -> str:
        response = self._post("/start")
        if not response.ok:
            raise EvaluatorUnavailable(
                f"Start failed with HTTP {response.status_code}"
            )

        try:
            payload = StartGameResponse.model_validate(self._json(response))
        except ValidationError as e:
            raise EvaluatorUnavailable(f"Malformed start response: {e}") from e

        logger.info("Started game %s", payload.game_id)
        return payload.game_id

    def submit_guess(self, game_id: str, word: str) -> GuessEvaluation:
        request = GuessRequest(game_id=game_id, guess=word)
        response = self._post("/guess", json=request.model_dump())

        if 400 <= response.status_code < 500:
            reason = self._error_reason(response) or "Error."
            logger.info("Guess %r rejected: %s", word, reason)
            raise GuessRejected(reason)
        if not response.ok:
            raise EvaluatorUnavailable(
                f"Guess failed with HTTP {response.status_code}"
            )

        try:
            payload = GuessResponse.model_validate(self._json(response))
        except ValidationError as e:
            raise EvaluatorUnavailable(f"Malformed guess response: {e}") from e

        logger.debug(
            "Guess %r -> %s (attempt %d)",
            word, [m.value for m in payload.feedback], payload.guesses,
        )
        return payload.to_evaluation()

    def _post(self, path: str, json: dict | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self.http.post(url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("POST %s failed: %s", url, e)
            raise EvaluatorUnavailable(str(e)) from e

    @staticmethod
    def _json(response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise EvaluatorUnavailable("Response body is not JSON") from e

    @staticmethod
    def _error_reason(response: requests.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        return ErrorDetail.model_validate(body).reason
