"""
Session Module - Runs one game against the evaluator.

A session represents one play-through:
- Created in LOADING, moves to PLAYING once the evaluator issues a game id
- Holds guesses, the draft, status and keyboard coloring
- Replaced wholesale by restart()

Sessions are EPHEMERAL:
- No persistence
- A reload means a new game
"""

from .session import Session, Subscriber
from .dispatcher import (
    InputDispatcher,
    InputSource,
    translate_screen_key,
    translate_key_event,
    KEYBOARD_ROWS,
)

__all__ = [
    "Session",
    "Subscriber",
    "InputDispatcher",
    "InputSource",
    "translate_screen_key",
    "translate_key_event",
    "KEYBOARD_ROWS",
]
