from .base import GuessScore, RankingConfig
from .entropy import EntropyRanker, entropy_of_guess, rank_guesses

__all__ = ["GuessScore", "RankingConfig", "EntropyRanker", "entropy_of_guess", "rank_guesses"]
