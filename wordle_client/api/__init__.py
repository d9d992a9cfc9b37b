"""
API Module - HTTP backend for a browser front end.

The front end:
1. Fetches the game snapshot
2. Posts on-screen and physical key presses
3. Restarts the game
4. Listens on a WebSocket for snapshot updates

There is one game per process. No accounts, no persistence.
"""

from .schemas import (
    GuessInfo,
    GameStateResponse,
    KeyPressRequest,
    KeyPressResponse,
    HealthResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    "GuessInfo",
    "GameStateResponse",
    "KeyPressRequest",
    "KeyPressResponse",
    "HealthResponse",
    "APIService",
    "create_app",
]
