"""
API Service - Business logic layer between the HTTP app and the session.

The service:
1. Owns the single Session and its InputDispatcher
2. Hands keys straight to the session, which drops input while a guess
   is pending instead of queueing it
3. Formats snapshots for the front end

This layer is framework-agnostic.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..config import Settings
from ..evaluator import HttpEvaluatorClient
from ..session import Session, InputDispatcher, InputSource
from .schemas import GameStateResponse, KeyPressResponse


logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    API service for a browser front end.

    Usage:
        service = APIService.from_settings(Settings.from_env())
        service.start()
        response = service.press_key(InputSource.PHYSICAL, "Enter")
    """
    session: Session
    dispatcher: InputDispatcher = field(init=False)

    def __post_init__(self):
        self.dispatcher = InputDispatcher(self.session)

    @classmethod
    def from_settings(cls, settings: Settings) -> APIService:
        evaluator = HttpEvaluatorClient(settings.api_url, timeout=settings.request_timeout)
        return cls(session=Session(evaluator))

    def start(self) -> GameStateResponse:
        """Start the first game (no-op once a game is running)."""
        self.session.start()
        return self.get_game_state()

    def restart(self) -> GameStateResponse:
        """Throw away the current game and start a new one."""
        self.session.restart()
        return self.get_game_state()

    def get_game_state(self) -> GameStateResponse:
        # Snapshots are immutable; readers never wait on a pending guess
        return GameStateResponse.from_state(self.session.snapshot())

    def press_key(self, source: InputSource, key: str) -> KeyPressResponse:
        """
        Feed a raw key from either keyboard into the game.

        Not serialised here: a key that arrives while a guess is with the
        evaluator must see the pending state and be dropped, not wait.
        """
        result = self.dispatcher.handle(source, key)

        if result is None:
            logger.debug("Ignored %s key %r", source.value, key)
        return KeyPressResponse(
            accepted=result is not None and result.success,
            error_code=result.error_code if result is not None else None,
            state_changed=result is not None and result.new_state is not None,
            game_state=self.get_game_state(),
        )
