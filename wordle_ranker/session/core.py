"""
Solver session: one game's live state across turns.

A Session owns the candidate pool and the ConstraintSet; nothing is kept in
module globals, so any number of sessions can run side by side.

Per turn:
    submit(guess, pattern)  -> validate, fold constraints, prune pool
    rank(top_k)             -> entropy ranking of allowed guesses vs pool

States:
    ACTIVE    accepting guesses
    SOLVED    all-hit pattern submitted, or the pool narrowed to one word
    EXHAUSTED the pool is empty (contradictory feedback)
reset() returns to ACTIVE with the full answer list.

Submissions are all-or-nothing: every check runs before any state changes.
Mutations happen under a lock; rank() copies the pool under the lock and
then scores that snapshot without holding it.
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Iterable, List, Optional, Tuple

from wordle_ranker.engine import (
    SOLVED, ConstraintSet, GuessNotAllowedError, SessionClosedError,
    filter_candidates, normalize_word, update_constraints, validate_pattern,
)
from wordle_ranker.ranking import GuessScore, RankingConfig, rank_guesses
from wordle_ranker.ranking.entropy import CancelFlag, ProgressFn

log = logging.getLogger(__name__)


class SessionState(enum.Enum):
    ACTIVE = "active"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


def _clean(words: Iterable[str]) -> List[str]:
    # dedupe in order; every word must be well-formed
    return list(dict.fromkeys(normalize_word(w) for w in words))


class Session:
    def __init__(
            self,
            answers: Iterable[str],
            allowed: Iterable[str] = (),
            *,
            enforce_vocabulary: bool = True,
            config: Optional[RankingConfig] = None,
    ):
        """
        Args:
          answers            : possible-answer list (initial pool)
          allowed            : extra allowed guesses; the guess list is the
                               sorted union with `answers`
          enforce_vocabulary : reject submitted guesses not in that union
          config             : RankingConfig used by rank()
        """
        self._answers: Tuple[str, ...] = tuple(_clean(answers))
        self._allowed: Tuple[str, ...] = tuple(sorted(set(self._answers) | set(_clean(allowed))))
        self._allowed_set = frozenset(self._allowed)
        self.enforce_vocabulary = enforce_vocabulary
        self.config = config or RankingConfig()

        self._lock = threading.Lock()
        self._constraints = ConstraintSet()
        self._pool: List[str] = list(self._answers)
        self._history: List[Tuple[str, str]] = []
        self._state = SessionState.ACTIVE if self._pool else SessionState.EXHAUSTED
        self._answer: Optional[str] = None

    # ---- read-only views ----

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pool(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._pool))

    @property
    def pool_size(self) -> int:
        return len(self._pool)

    @property
    def initial_size(self) -> int:
        return len(self._answers)

    @property
    def allowed(self) -> Tuple[str, ...]:
        return self._allowed

    @property
    def constraints(self) -> ConstraintSet:
        with self._lock:
            return self._constraints.copy()

    @property
    def history(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(self._history)

    @property
    def answer(self) -> Optional[str]:
        """The solved word, once known."""
        return self._answer

    # ---- operations ----

    def submit(self, guess: str, pattern: str) -> int:
        """
        Record one guess and its feedback; return the new pool size.

        Raises (state untouched on any of them):
          SessionClosedError     session is SOLVED or EXHAUSTED
          InvalidWordLengthError / InvalidAlphabetError
          InvalidPatternError
          GuessNotAllowedError   enforce_vocabulary and guess not allowed
        """
        g = normalize_word(guess)
        patt = validate_pattern(g, pattern)
        if self.enforce_vocabulary and g not in self._allowed_set:
            raise GuessNotAllowedError(g)

        with self._lock:
            if self._state is not SessionState.ACTIVE:
                raise SessionClosedError(f"session is {self._state.value}; call reset() first")

            update_constraints(self._constraints, g, patt)
            self._pool = filter_candidates(self._pool, self._constraints)
            self._history.append((g, patt))

            n = len(self._pool)
            if patt == SOLVED:
                self._state = SessionState.SOLVED
                self._answer = g
            elif n == 1:
                self._state = SessionState.SOLVED
                self._answer = self._pool[0]
            elif n == 0:
                self._state = SessionState.EXHAUSTED
            state = self._state
            summary = self._constraints.describe()

        log.debug("submit %s %s -> %d candidates (%s) [%s]", g, patt, n, state.value, summary)
        if state is SessionState.EXHAUSTED:
            log.info("no candidates left after %s %s", g, patt)
        return n

    def rank(
            self,
            top_k: Optional[int] = None,
            on_progress: Optional[ProgressFn] = None,
            cancel: Optional[CancelFlag] = None,
    ) -> List[GuessScore]:
        """
        Rank allowed guesses against the current pool, best first.

        Returns [] unless the session is ACTIVE. May raise RankingCancelled.
        """
        with self._lock:
            if self._state is not SessionState.ACTIVE or not self._pool:
                return []
            snapshot = tuple(self._pool)

        return rank_guesses(self._allowed, snapshot, config=self.config, top_k=top_k,
                            on_progress=on_progress, cancel=cancel)

    def reset(self) -> None:
        with self._lock:
            self._constraints.clear()
            self._pool = list(self._answers)
            self._history.clear()
            self._answer = None
            self._state = SessionState.ACTIVE if self._pool else SessionState.EXHAUSTED
        log.debug("session reset: %d candidates", len(self._answers))


def new_session(answers: Iterable[str], guesses: Iterable[str] = (), **kwargs) -> Session:
    """Factory mirroring Session(answers, guesses, **kwargs)."""
    return Session(answers, guesses, **kwargs)
