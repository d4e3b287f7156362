"""
Input validation for words and feedback patterns.

Answers the question "is this input well-formed?" before anything touches
session state:
  - a word is a string of exactly WORD_LENGTH letters a–z (case-insensitive,
    normalised to lowercase)
  - a pattern has WORD_LENGTH feedback symbols and could have been produced
    by the two-pass scoring rule

The raising helpers are what the session uses; `validate_guess` keeps the
old boolean form for callers that just want a yes/no.
"""

from __future__ import annotations

from typing import Dict, Iterable, Set

from .errors import InvalidAlphabetError, InvalidPatternError, InvalidWordLengthError
from .scoring import ABSENT, HIT, PRESENT, WORD_LENGTH, parse_pattern


def _is_ascii_alpha(w: str) -> bool:
    return w.isascii() and w.isalpha()


def normalize_word(word: str, N: int = WORD_LENGTH) -> str:
    """Strip + lowercase `word`; raise if it is not N letters a–z."""
    if not isinstance(word, str):
        raise InvalidAlphabetError(repr(word))
    w = word.strip().lower()
    if len(w) != N:
        raise InvalidWordLengthError(w, N)
    if not _is_ascii_alpha(w):
        raise InvalidAlphabetError(w)
    return w


def validate_pattern(guess: str, pattern: str) -> str:
    """
    Parse `pattern` and check it is achievable for `guess`.

    The second scoring pass hands out presents left to right, so for any one
    letter every 'Y' must come before every '-' among its non-hit positions.
    A hand-marked pattern like "-Y" on a doubled letter can never be
    produced and is rejected here rather than silently emptying the pool.
    """
    patt = parse_pattern(pattern)
    seen_absent: Set[str] = set()
    for ch, mark in zip(guess, patt):
        if mark == ABSENT:
            seen_absent.add(ch)
        elif mark == PRESENT and ch in seen_absent:
            raise InvalidPatternError(
                f"pattern {patt!r} marks {ch!r} present after an absent {ch!r} in {guess!r}")
    return patt


def letter_marks(guess: str, pattern: str) -> Dict[str, int]:
    """Per-letter count of G/Y marks in one (guess, pattern) pair."""
    out: Dict[str, int] = {}
    for ch, mark in zip(guess, pattern):
        if mark == HIT or mark == PRESENT:
            out[ch] = out.get(ch, 0) + 1
    return out


def validate_guess(word: str, allowed: Iterable[str], N: int = WORD_LENGTH) -> bool:
    """
    Return True if `word` is a well-formed guess present in `allowed`.

    `allowed` can be any iterable; pass a set when calling in a loop.
    """
    if not isinstance(word, str):
        return False

    w = word.strip().lower()
    if len(w) != N or not _is_ascii_alpha(w):
        return False

    allowed_set: Set[str] = allowed if isinstance(allowed, (set, frozenset)) \
        else {a.strip().lower() for a in allowed}
    return w in allowed_set
