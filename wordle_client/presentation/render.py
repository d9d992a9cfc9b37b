"""
Terminal rendering with rich.

Grid layout: MAX_ATTEMPTS rows of WORD_LENGTH cells. Completed guesses
show their feedback colors, the row after them shows the draft while the
game is being played, the rest are blank.
"""

from __future__ import annotations
from dataclasses import dataclass

from rich.console import Group
from rich.text import Text

from ..engine_core.state import GameState, GameStatus, Mark, WORD_LENGTH, MAX_ATTEMPTS
from ..session.dispatcher import KEYBOARD_ROWS, SCREEN_ENTER, SCREEN_BACKSPACE


MARK_COLORS = {
    Mark.GREEN: "#6aaa64",
    Mark.YELLOW: "#c9b458",
    Mark.GRAY: "#787c7e",
}
EMPTY_CELL_STYLE = "bold #222222 on #ffffff"
UNUSED_KEY_STYLE = "bold black on #d3d6da"


@dataclass(frozen=True)
class Cell:
    """One square of the grid."""
    letter: str = ""
    mark: Mark | None = None


def grid_rows(state: GameState) -> list[list[Cell]]:
    """Lay the snapshot out as MAX_ATTEMPTS x WORD_LENGTH cells."""
    rows: list[list[Cell]] = []
    for row in range(MAX_ATTEMPTS):
        if row < len(state.guesses):
            guess = state.guesses[row]
            rows.append([
                Cell(letter=letter, mark=mark)
                for letter, mark in zip(guess.word, guess.feedback)
            ])
        elif row == len(state.guesses) and state.status is GameStatus.PLAYING:
            draft = state.draft.ljust(WORD_LENGTH)
            rows.append([Cell(letter=ch.strip()) for ch in draft[:WORD_LENGTH]])
        else:
            rows.append([Cell() for _ in range(WORD_LENGTH)])
    return rows


def _cell_style(cell: Cell) -> str:
    if cell.mark is None:
        return EMPTY_CELL_STYLE
    return f"bold #ffffff on {MARK_COLORS[cell.mark]}"


def render_grid(state: GameState) -> Text:
    text = Text()
    for i, row in enumerate(grid_rows(state)):
        if i:
            text.append("\n")
        for j, cell in enumerate(row):
            if j:
                text.append(" ")
            text.append(f" {(cell.letter or ' ').upper()} ", style=_cell_style(cell))
    return text


def render_keyboard(state: GameState) -> Text:
    """Keyboard rows with each letter colored by its strongest mark."""
    text = Text()
    for i, row in enumerate(KEYBOARD_ROWS):
        if i:
            text.append("\n")
        text.append(" " * i)
        for j, key in enumerate(row):
            if j:
                text.append(" ")
            if key == SCREEN_ENTER:
                text.append(" Enter ", style=UNUSED_KEY_STYLE)
                continue
            if key == SCREEN_BACKSPACE:
                text.append(" ⌫ ", style=UNUSED_KEY_STYLE)
                continue
            mark = state.letter_statuses.get(key)
            style = (
                f"bold #ffffff on {MARK_COLORS[mark]}" if mark else UNUSED_KEY_STYLE
            )
            text.append(f" {key} ", style=style)
    return text


def render_status(state: GameState) -> Text:
    """Message line plus the result banner once the game is over."""
    text = Text()
    if state.status is GameStatus.LOADING and not state.message:
        text.append("Starting game...", style="dim")
    if state.pending:
        text.append("Checking...", style="dim")
    if state.message:
        if text:
            text.append("\n")
        text.append(state.message, style="#bb0000")
    if state.status is GameStatus.WON:
        if text:
            text.append("\n")
        text.append("Correct!", style="bold #6aaa64")
    elif state.status is GameStatus.LOST:
        if text:
            text.append("\n")
        text.append("Out of attempts!", style="bold #bb0000")
    return text


def render_game(state: GameState) -> Group:
    return Group(
        Text("Wordle", style="bold"),
        render_grid(state),
        render_status(state),
        render_keyboard(state),
    )
