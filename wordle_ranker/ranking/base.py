from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GuessScore:
    """One ranked guess. Recomputed every turn, never stored."""
    word: str
    entropy: float          # bits, tie bonus included when is_candidate
    is_candidate: bool      # word is still a possible answer
    probability: float      # 1/|pool| if is_candidate else 0
    buckets: int = 0        # distinct feedback patterns over the pool
    worst_bucket: int = 0   # largest group of answers sharing one pattern


@dataclass
class RankingConfig:
    """
    Knobs for the entropy ranker.

    tie_bonus        : bits added to guesses that are themselves possible
                       answers; 0.0 ranks on pure entropy
    small_pool_limit : at or below this many candidates, only the candidates
                       are scored (any of them wins or leaves one)
    batch_size       : guesses scored between progress / cancel checks
    workers          : >1 spreads batches over a thread pool
    """
    tie_bonus: float = 0.1
    small_pool_limit: int = 2
    batch_size: int = 256
    workers: int = 1

    def __post_init__(self):
        if self.tie_bonus < 0:
            raise ValueError(f"tie_bonus must be >= 0; got {self.tie_bonus}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1; got {self.batch_size}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1; got {self.workers}")
        if self.small_pool_limit < 0:
            raise ValueError(f"small_pool_limit must be >= 0; got {self.small_pool_limit}")
