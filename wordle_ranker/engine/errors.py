"""
Typed errors raised by the ranking core.

All of them derive from ValueError so callers that only care about "bad
input" can keep catching ValueError. None of them is fatal: a session that
rejects an input is left exactly as it was before the call.
"""

from __future__ import annotations


class RankerError(ValueError):
    """Base class for every recoverable error raised by wordle_ranker."""


class InvalidWordLengthError(RankerError):
    def __init__(self, word: str, expected: int):
        super().__init__(f"word {word!r} has length {len(word)}; expected {expected}")
        self.word = word
        self.expected = expected


class InvalidAlphabetError(RankerError):
    def __init__(self, word: str):
        super().__init__(f"word {word!r} contains characters outside a-z")
        self.word = word


class InvalidPatternError(RankerError):
    """Pattern has the wrong length, unknown symbols, or an impossible order."""


class EmptyPoolError(RankerError):
    """Ranking was requested with no candidate answers left."""


class GuessNotAllowedError(RankerError):
    def __init__(self, word: str):
        super().__init__(f"{word!r} is not in the allowed guess list")
        self.word = word


class SessionClosedError(RankerError):
    """A guess was submitted after the session was solved or exhausted."""


class RankingCancelled(RankerError):
    """Raised when a ranking run observes its cancel flag between batches."""

    def __init__(self, done: int, total: int):
        super().__init__(f"ranking cancelled after {done}/{total} guesses")
        self.done = done
        self.total = total
