"""Rank Wordle guesses by expected information over the remaining answers."""

from .ranking import GuessScore, RankingConfig, rank_guesses
from .session import Session, SessionState, new_session

__version__ = "0.1.0"

__all__ = ["GuessScore", "RankingConfig", "rank_guesses", "Session", "SessionState", "new_session"]
