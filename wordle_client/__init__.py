"""
Wordle Client - Session engine for a remote word-guessing game.

The client collects letter input, submits finished guesses to a remote
evaluator and keeps the state a presentation layer needs:
- Guess history with per-letter feedback
- The draft being typed
- Game status and the last message
- Keyboard letter coloring
"""

__version__ = "0.1.0"
