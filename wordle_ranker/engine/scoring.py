"""
Wordle-style scoring (feedback) for a (guess, answer) pair.

Conventions:
  - 'G'  : hit     = correct letter in the correct position
  - 'Y'  : present = letter occurs in the answer, but not at this position
  - '-'  : absent  = letter not present (or present fewer times than guessed)

Algorithm (two-pass, canonical for Wordle):
  1) Count every letter of the answer. First pass marks all hits and
     consumes one count per hit.
  2) Second pass, in position order, marks a non-hit position present only
     while the letter still has a remaining count, consuming it.

Hits always win over presents for the same letter instance, and a letter
never receives more G/Y marks than it has occurrences in the answer.

Patterns also have a compact integer form (base 3, '-'=0, 'Y'=1, 'G'=2,
first position most significant) so the ranking loop can tally them in a
fixed 243-slot array instead of a dict. `pattern_codes` computes those
codes for one guess against a whole matrix of answers at once with numpy.
"""

from __future__ import annotations

from typing import Iterable, Literal

import numpy as np

from .errors import InvalidPatternError

WORD_LENGTH = 5

HIT: Literal["G"] = "G"
PRESENT: Literal["Y"] = "Y"
ABSENT: Literal["-"] = "-"

SOLVED = HIT * WORD_LENGTH
NUM_PATTERNS = 3 ** WORD_LENGTH  # 243

_DIGIT = {ABSENT: 0, PRESENT: 1, HIT: 2}
_SYMBOL = (ABSENT, PRESENT, HIT)
_WEIGHTS = np.array([3 ** (WORD_LENGTH - 1 - i) for i in range(WORD_LENGTH)], dtype=np.int64)

# Notations accepted from people typing feedback in by hand.
_ALIASES = {
    "g": HIT, "G": HIT, "2": HIT,
    "y": PRESENT, "Y": PRESENT, "1": PRESENT,
    "b": ABSENT, "B": ABSENT, "-": ABSENT, "0": ABSENT,
    ".": ABSENT, "_": ABSENT, "x": ABSENT, "X": ABSENT,
}


def score(guess: str, answer: str) -> str:
    """
    Compute the feedback pattern for `guess` against `answer`.

    Preconditions:
      - both words already normalised (lowercase) and of equal length

    Examples:
      score("speed", "erase") -> "Y-YY-"
      score("belle", "level") -> "-GYYY"
      score("crane", "crane") -> "GGGGG"
    """
    n = len(guess)
    pattern = [ABSENT] * n

    remaining = [0] * 26
    for ch in answer:
        remaining[ord(ch) - 97] += 1

    # Pass 1: hits consume their letter first.
    for i in range(n):
        if guess[i] == answer[i]:
            pattern[i] = HIT
            remaining[ord(guess[i]) - 97] -= 1

    # Pass 2: presents, left to right, while the letter is still available.
    for i in range(n):
        if pattern[i] == HIT:
            continue
        k = ord(guess[i]) - 97
        if remaining[k] > 0:
            pattern[i] = PRESENT
            remaining[k] -= 1

    return "".join(pattern)


def encode_pattern(pattern: str) -> int:
    """'G/Y/-' string -> integer code in [0, 243)."""
    code = 0
    for ch in pattern:
        code = code * 3 + _DIGIT[ch]
    return code


def decode_pattern(code: int) -> str:
    """Integer code -> 'G/Y/-' string."""
    if not 0 <= code < NUM_PATTERNS:
        raise InvalidPatternError(f"pattern code {code} out of range")
    out = []
    for _ in range(WORD_LENGTH):
        code, digit = divmod(code, 3)
        out.append(_SYMBOL[digit])
    return "".join(reversed(out))


def score_code(guess: str, answer: str) -> int:
    return encode_pattern(score(guess, answer))


def parse_pattern(text: str) -> str:
    """
    Normalise user-entered feedback into the canonical 'G/Y/-' form.

    Accepts g/y/b, G/Y/-, 2/1/0 and a few absent aliases ('.', '_', 'x');
    whitespace between symbols is ignored, so "g g b b g" == "GG--G".
    """
    symbols = [ch for ch in str(text) if not ch.isspace()]
    try:
        out = "".join(_ALIASES[ch] for ch in symbols)
    except KeyError as e:
        raise InvalidPatternError(f"unknown feedback symbol {e.args[0]!r} in {text!r}") from None
    if len(out) != WORD_LENGTH:
        raise InvalidPatternError(
            f"pattern {text!r} has {len(out)} symbols; expected {WORD_LENGTH}")
    return out


# ---- vectorised form ----

def encode_words(words: Iterable[str]) -> np.ndarray:
    """Stack words into an (n, WORD_LENGTH) uint8 matrix of letter indexes 0..25."""
    words = list(words)
    if not words:
        return np.zeros((0, WORD_LENGTH), dtype=np.uint8)
    raw = np.frombuffer("".join(words).encode("ascii"), dtype=np.uint8)
    return (raw.reshape(len(words), WORD_LENGTH) - 97).astype(np.uint8)


def pattern_codes(guess: np.ndarray, answers: np.ndarray) -> np.ndarray:
    """
    Pattern codes of one encoded guess (shape (L,)) against every row of
    `answers` (shape (n, L)). Same two-pass rule as `score`:

      present_i  <=>  not hit_i  and  avail(c) > earlier(i)

    where c = guess[i], avail(c) counts answer positions holding c that are
    not hits, and earlier(i) counts non-hit guess positions j < i that also
    hold c (each of those has already claimed one unit of c, if any is left).
    """
    hits = answers == guess                  # (n, L)
    open_ = ~hits
    digits = hits.astype(np.int64) * 2
    for i in range(WORD_LENGTH):
        c = guess[i]
        avail = ((answers == c) & open_).sum(axis=1)
        earlier = np.zeros(answers.shape[0], dtype=np.int64)
        for j in range(i):
            if guess[j] == c:
                earlier += open_[:, j]
        digits[:, i] += (open_[:, i] & (avail > earlier)).astype(np.int64)
    return digits @ _WEIGHTS
