"""
Feedback Aggregator - Keyboard coloring from guess feedback.

merge() is pure: it never touches the map it is given. The aggregated map
is only ever a cache of the guess history; letter_statuses() rebuilds it
from scratch.
"""

from __future__ import annotations
from typing import Iterable, Mapping, Sequence

from .state import Guess, Mark


def merge(
    current: Mapping[str, Mark],
    word: str,
    feedback: Sequence[Mark],
) -> dict[str, Mark]:
    """
    Fold one guess into a letter -> mark map.

    Each letter keeps the strongest mark it has ever received
    (green > yellow > gray > absent). Merging the same guess twice is a
    no-op, and the result does not depend on position order.

    Args:
        current: Existing letter statuses (keys are uppercase letters)
        word: The guessed word
        feedback: One mark per letter of word

    Returns:
        A new dict with the merged statuses
    """
    if len(word) != len(feedback):
        raise ValueError(
            f"Feedback length {len(feedback)} does not match word {word!r}"
        )

    merged = dict(current)
    for letter, mark in zip(word.upper(), feedback):
        mark = Mark(mark)
        existing = merged.get(letter)
        if existing is None or mark.rank > existing.rank:
            merged[letter] = mark
    return merged


def letter_statuses(guesses: Iterable[Guess]) -> dict[str, Mark]:
    """Recompute the full letter -> mark map from a guess history."""
    statuses: dict[str, Mark] = {}
    for guess in guesses:
        statuses = merge(statuses, guess.word, guess.feedback)
    return statuses
