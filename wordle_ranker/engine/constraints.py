"""
Constraint tracking and candidate filtering.

Each observed (guess, pattern) pair is folded into a ConstraintSet:
  - fixed       : position -> letter that must be there       (from 'G')
  - excluded_at : position -> letters that cannot be there     (from 'Y' and '-')
  - min_count   : letter -> minimum occurrences in the answer  (G+Y count in one guess)
  - max_count   : letter -> maximum occurrences                 (set by any '-')

The set only ever narrows, even when feedback contradicts itself: counts
keep the tightest bound seen and conflicting hits make the position
unsatisfiable. Folding pairs one at a time in submission order
gives the same result as replaying the whole history, so a pool filtered
after every turn equals the original pool filtered once at the end.

`filter_by_history` is the slow reference: keep a word iff re-scoring every
past guess against it reproduces the recorded pattern. For any pattern the
scorer can produce, both filters agree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

from .scoring import ABSENT, HIT, PRESENT, WORD_LENGTH, score
from .validation import letter_marks

# History is a sequence of (guess, pattern) tuples.
History = Iterable[Tuple[str, str]]


def _empty_excluded() -> List[Set[str]]:
    return [set() for _ in range(WORD_LENGTH)]


@dataclass
class ConstraintSet:
    fixed: Dict[int, str] = field(default_factory=dict)
    excluded_at: List[Set[str]] = field(default_factory=_empty_excluded)
    min_count: Dict[str, int] = field(default_factory=dict)
    max_count: Dict[str, int] = field(default_factory=dict)

    def copy(self) -> "ConstraintSet":
        return ConstraintSet(
            fixed=dict(self.fixed),
            excluded_at=[set(s) for s in self.excluded_at],
            min_count=dict(self.min_count),
            max_count=dict(self.max_count),
        )

    def clear(self) -> None:
        self.fixed.clear()
        for s in self.excluded_at:
            s.clear()
        self.min_count.clear()
        self.max_count.clear()

    def is_empty(self) -> bool:
        return not (self.fixed or self.min_count or self.max_count
                    or any(self.excluded_at))

    def describe(self) -> str:
        """Compact one-line summary, e.g. for debug logs."""
        known = "".join(self.fixed.get(i, ".") for i in range(WORD_LENGTH))
        mins = ",".join(f"{c}>={n}" for c, n in sorted(self.min_count.items()))
        maxs = ",".join(f"{c}<={n}" for c, n in sorted(self.max_count.items()))
        return f"{known} min[{mins}] max[{maxs}]"


def update_constraints(constraints: ConstraintSet, guess: str, pattern: str) -> ConstraintSet:
    """
    Fold one (guess, pattern) pair into `constraints` in place and return it.

    Never rejects input; the caller validates words and patterns first.
    """
    local_min = letter_marks(guess, pattern)

    for ch, n in local_min.items():
        if n > constraints.min_count.get(ch, 0):
            constraints.min_count[ch] = n

    for i, (ch, mark) in enumerate(zip(guess, pattern)):
        if mark == HIT:
            prev = constraints.fixed.get(i)
            if prev is not None and prev != ch:
                # two different hits at one position: nothing can satisfy both
                constraints.excluded_at[i].update((prev, ch))
            constraints.fixed[i] = ch
        elif mark == PRESENT:
            constraints.excluded_at[i].add(ch)
        elif mark == ABSENT:
            # capped at however many times it matched elsewhere in this guess;
            # an earlier, tighter cap stays
            n = local_min.get(ch, 0)
            constraints.max_count[ch] = min(constraints.max_count.get(ch, n), n)
            constraints.excluded_at[i].add(ch)

    return constraints


def constraints_from_history(history: History) -> ConstraintSet:
    cs = ConstraintSet()
    for g, patt in history:
        update_constraints(cs, g, patt)
    return cs


def is_consistent(word: str, constraints: ConstraintSet) -> bool:
    for pos, ch in constraints.fixed.items():
        if word[pos] != ch:
            return False

    for i, ch in enumerate(word):
        if ch in constraints.excluded_at[i]:
            return False

    counts = [0] * 26
    for ch in word:
        counts[ord(ch) - 97] += 1

    for ch, n in constraints.min_count.items():
        if counts[ord(ch) - 97] < n:
            return False

    for ch, n in constraints.max_count.items():
        if counts[ord(ch) - 97] > n:
            return False

    return True


def filter_candidates(words: Iterable[str], constraints: ConstraintSet) -> List[str]:
    """Words consistent with `constraints`, order preserved."""
    return [w for w in words if is_consistent(w, constraints)]


def filter_by_history(words: Iterable[str], history: History) -> List[str]:
    """
    Keep only words that would produce exactly the recorded patterns for
    every (guess, pattern) in `history` (order preserved).
    """
    history = list(history)
    out: List[str] = []
    for w in words:
        if all(score(g, w) == patt for g, patt in history):
            out.append(w)
    return out
