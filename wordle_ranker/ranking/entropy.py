"""
Entropy ranking (expected information gain).

Main idea:
  - For each guess g, partition the CURRENT pool by the feedback pattern
    g would produce against each possible answer.
  - Shannon entropy H(g) of that partition (answers uniform over the pool)
    is the expected information g reveals. Rank guesses by H, highest first.

Tie-break:
  - a small configurable bonus for guesses that are themselves candidates
    (they can also win outright), then candidates before non-candidates,
    then the guess list's own order. The ordering is total, so rankings
    are reproducible.

Acceleration:
  - Words are encoded once into uint8 matrices; one guess is scored against
    the whole pool in a handful of numpy ops and tallied with bincount into
    the fixed 243-slot pattern array.
  - With at most `small_pool_limit` candidates, only the candidates are
    scored.
  - Work is split into batches. Between batches the ranker reports
    progress and polls a cancel flag. `EntropyRanker.step()` exposes the
    batches to callers that want to interleave other work; `workers > 1`
    maps batches over a thread pool and merges the partial results.
"""

from __future__ import annotations

import heapq
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

import numpy as np

from wordle_ranker.engine import (
    NUM_PATTERNS, EmptyPoolError, RankingCancelled, encode_words, pattern_codes,
)
from .base import GuessScore, RankingConfig

log = logging.getLogger(__name__)

ProgressFn = Callable[[int, int], None]


class CancelFlag(Protocol):
    def is_set(self) -> bool: ...


def _bucket_stats(codes: np.ndarray):
    """(entropy_bits, distinct_patterns, worst_bucket) for one row of codes."""
    counts = np.bincount(codes, minlength=NUM_PATTERNS)
    nz = counts[counts > 0]
    p = nz / codes.shape[0]
    H = float(-(p * np.log2(p)).sum()) + 0.0   # + 0.0 turns -0.0 into 0.0
    return H, int(nz.shape[0]), int(nz.max())


def entropy_of_guess(guess: str, pool: Sequence[str]) -> float:
    """Entropy in bits of `guess`'s feedback distribution over `pool` (no bonus)."""
    pool = list(pool)
    if not pool:
        raise EmptyPoolError("cannot compute entropy over an empty pool")
    codes = pattern_codes(encode_words([guess])[0], encode_words(pool))
    return _bucket_stats(codes)[0]


def _sort_key(item):
    idx, s = item
    return (-s.entropy, not s.is_candidate, idx)


class EntropyRanker:
    """
    Steppable ranking of `guesses` against a frozen snapshot of `pool`.

        ranker = EntropyRanker(allowed, pool)
        while not ranker.finished:
            ranker.step()          # one batch
        top = ranker.results(10)
    """

    def __init__(self, guesses: Iterable[str], pool: Iterable[str],
                 config: Optional[RankingConfig] = None):
        self.config = config or RankingConfig()

        self.pool = tuple(pool)
        if not self.pool:
            raise EmptyPoolError("ranking requested with an empty candidate pool")
        self._pool_set = frozenset(self.pool)

        if len(self.pool) <= self.config.small_pool_limit:
            self.guesses = tuple(sorted(self._pool_set))
        else:
            self.guesses = tuple(dict.fromkeys(guesses))

        self._pool_matrix = encode_words(self.pool)
        self._pool_matrix.setflags(write=False)
        self._guess_matrix = encode_words(self.guesses)
        self._guess_matrix.setflags(write=False)

        self._scores: List[Optional[GuessScore]] = [None] * len(self.guesses)
        self._next = 0
        self._done = 0

    @property
    def total(self) -> int:
        return len(self.guesses)

    @property
    def done(self) -> int:
        return self._done

    @property
    def finished(self) -> bool:
        return self._done >= self.total

    def _score_range(self, start: int, stop: int) -> List[GuessScore]:
        n = len(self.pool)
        bonus = self.config.tie_bonus
        out: List[GuessScore] = []
        for i in range(start, stop):
            word = self.guesses[i]
            H, buckets, worst = _bucket_stats(pattern_codes(self._guess_matrix[i], self._pool_matrix))
            cand = word in self._pool_set
            out.append(GuessScore(
                word=word,
                entropy=H + bonus if cand else H,
                is_candidate=cand,
                probability=1.0 / n if cand else 0.0,
                buckets=buckets,
                worst_bucket=worst,
            ))
        return out

    def _store(self, start: int, scores: List[GuessScore]) -> None:
        self._scores[start:start + len(scores)] = scores
        self._done += len(scores)

    def _pending(self):
        """(lo, hi) of every batch not stored yet, in order."""
        size = self.config.batch_size
        for lo in range(self._next, self.total, size):
            # batches are stored whole, so the first slot tells
            if self._scores[lo] is None:
                yield lo, min(lo + size, self.total)

    def step(self) -> int:
        """Score the next unscored batch; return how many guesses are done so far."""
        batch = next(self._pending(), None)
        if batch is None:
            self._next = self.total
            return self._done
        lo, hi = batch
        self._store(lo, self._score_range(lo, hi))
        self._next = hi
        return self._done

    def run(self, on_progress: Optional[ProgressFn] = None,
            cancel: Optional[CancelFlag] = None) -> "EntropyRanker":
        """
        Score everything that is left, sequentially or on a thread pool.

        After RankingCancelled the ranker keeps every batch it finished;
        calling run() or step() again picks up from the first missing one.
        """
        t0 = time.perf_counter()
        if self.config.workers > 1 and self.total - self._done > self.config.batch_size:
            self._run_parallel(on_progress, cancel)
        else:
            while not self.finished:
                if cancel is not None and cancel.is_set():
                    log.info("ranking cancelled at %d/%d", self._done, self.total)
                    raise RankingCancelled(self._done, self.total)
                self.step()
                if on_progress is not None:
                    on_progress(self._done, self.total)
        log.debug("ranked %d guesses against %d candidates in %.1f ms",
                  self.total, len(self.pool), (time.perf_counter() - t0) * 1000.0)
        return self

    def _run_parallel(self, on_progress: Optional[ProgressFn],
                      cancel: Optional[CancelFlag]) -> None:
        stop = threading.Event()
        cancelled = False

        def work(lo: int, hi: int):
            if stop.is_set() or (cancel is not None and cancel.is_set()):
                return lo, None
            return lo, self._score_range(lo, hi)

        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            futures = [pool.submit(work, lo, hi) for lo, hi in self._pending()]
            for fut in as_completed(futures):
                lo, scores = fut.result()
                if scores is None or (cancel is not None and cancel.is_set()):
                    cancelled = True
                    stop.set()
                    for f in futures:
                        f.cancel()
                    break
                self._store(lo, scores)
                if on_progress is not None:
                    on_progress(self._done, self.total)

        if not cancelled:
            self._next = self.total
            return

        # keep batches that finished while the pool was winding down
        for fut in futures:
            if fut.cancelled():
                continue
            lo, scores = fut.result()
            if scores is not None and self._scores[lo] is None:
                self._store(lo, scores)
        self._next = next(self._pending(), (self.total, self.total))[0]
        if self.finished:
            return
        log.info("ranking cancelled at %d/%d", self._done, self.total)
        raise RankingCancelled(self._done, self.total)

    def results(self, top_k: Optional[int] = None) -> List[GuessScore]:
        """Scored guesses, best first. Call once `finished`."""
        if not self.finished:
            raise RuntimeError(f"ranking incomplete: {self._done}/{self.total}")
        items = list(enumerate(self._scores))
        if top_k is not None and top_k < len(items):
            items = heapq.nsmallest(max(top_k, 0), items, key=_sort_key)
        else:
            items.sort(key=_sort_key)
        return [s for _, s in items]


def rank_guesses(
        guesses: Iterable[str],
        pool: Iterable[str],
        *,
        config: Optional[RankingConfig] = None,
        top_k: Optional[int] = None,
        on_progress: Optional[ProgressFn] = None,
        cancel: Optional[CancelFlag] = None,
) -> List[GuessScore]:
    """
    Rank `guesses` by expected information against `pool`.

    Args:
      guesses     : allowed guess list (order is the final tie-break)
      pool        : current candidate answers
      config      : RankingConfig (tie bonus, batch size, workers, ...)
      top_k       : keep only the best K
      on_progress : called as on_progress(done, total) after every batch
      cancel      : object with is_set(), e.g. threading.Event; polled
                    between batches

    Raises:
      EmptyPoolError   if `pool` is empty
      RankingCancelled if `cancel` was set before the run finished
    """
    ranker = EntropyRanker(guesses, pool, config)
    ranker.run(on_progress=on_progress, cancel=cancel)
    return ranker.results(top_k)
