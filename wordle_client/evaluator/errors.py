"""Errors raised by evaluator clients."""


class EvaluatorError(Exception):
    """Base class for anything the evaluator round trip can raise."""


class EvaluatorUnavailable(EvaluatorError):
    """
    The evaluator could not be reached or answered with something unusable.

    Covers connection errors, server errors and malformed payloads.
    """


class GuessRejected(EvaluatorError):
    """The evaluator refused the guess (e.g. not a known word)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
