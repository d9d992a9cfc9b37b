"""
Presentation - Read-only rendering of a game snapshot.

Renders the guess grid, the message line and the colored keyboard for a
terminal. Nothing here changes state; key input goes back through the
InputDispatcher.
"""

from .render import (
    Cell,
    grid_rows,
    render_grid,
    render_keyboard,
    render_status,
    render_game,
)

__all__ = [
    "Cell",
    "grid_rows",
    "render_grid",
    "render_keyboard",
    "render_status",
    "render_game",
]
