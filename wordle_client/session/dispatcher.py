"""
Input Dispatcher - One action stream from two keyboards.

The player can click the on-screen keyboard or type on a physical one.
Both are adapters that translate raw input into the same three actions,
so the session never knows where a key came from:

    on-screen "Q".."M", "ENTER", "BKSP"   \
                                           -> APPEND_LETTER / DELETE_LETTER / SUBMIT_GUESS
    physical "a".."Z", "Enter", "Backspace" /

Unknown input is ignored, never raised. Input that arrives while the game
is not accepting edits is dropped, not queued.
"""

from __future__ import annotations
from enum import Enum
from typing import Any

from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import is_letter
from .session import Session


SCREEN_ENTER = "ENTER"
SCREEN_BACKSPACE = "BKSP"

KEYBOARD_ROWS = (
    tuple("QWERTYUIOP"),
    tuple("ASDFGHJKL"),
    (SCREEN_ENTER, *"ZXCVBNM", SCREEN_BACKSPACE),
)

PHYSICAL_ENTER = "Enter"
PHYSICAL_BACKSPACE = "Backspace"


class InputSource(Enum):
    """Where a raw key came from."""
    SCREEN = "screen"
    PHYSICAL = "physical"


def translate_screen_key(label: Any) -> Action | None:
    """Map an on-screen key label to an action, or None to ignore it."""
    if not isinstance(label, str):
        return None
    if is_letter(label):
        return Action.append_letter(label.lower())
    if label.upper() == SCREEN_ENTER:
        return Action.submit_guess()
    if label.upper() == SCREEN_BACKSPACE:
        return Action.delete_letter()
    return None


def translate_key_event(key: Any) -> Action | None:
    """Map a physical key name (DOM `KeyboardEvent.key` style) to an action."""
    if not isinstance(key, str):
        return None
    if is_letter(key):
        return Action.append_letter(key.lower())
    if key == PHYSICAL_ENTER:
        return Action.submit_guess()
    if key == PHYSICAL_BACKSPACE:
        return Action.delete_letter()
    return None


_TRANSLATORS = {
    InputSource.SCREEN: translate_screen_key,
    InputSource.PHYSICAL: translate_key_event,
}


class InputDispatcher:
    """
    Feeds raw key input into a Session.

    Usage:
        dispatcher = InputDispatcher(session)
        dispatcher.press_screen_key("ENTER")
        dispatcher.key_down("Backspace")

    Both return the ActionResult when the key was turned into an action and
    delivered, or None when it was ignored. A presentation layer can use
    that to decide whether to swallow the raw event.
    """

    def __init__(self, session: Session):
        self.session = session

    def press_screen_key(self, label: Any) -> ActionResult | None:
        return self.handle(InputSource.SCREEN, label)

    def key_down(self, key: Any) -> ActionResult | None:
        return self.handle(InputSource.PHYSICAL, key)

    def handle(self, source: InputSource, raw: Any) -> ActionResult | None:
        action = _TRANSLATORS[source](raw)
        if action is None:
            return None
        return self.dispatch(action)

    def dispatch(self, action: Action) -> ActionResult | None:
        """Deliver an action if the game is taking input right now."""
        if not self.session.is_active():
            return None
        return self.session.dispatch(action)
