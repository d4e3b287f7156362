from .scoring import (
    WORD_LENGTH, HIT, PRESENT, ABSENT, SOLVED, NUM_PATTERNS,
    score, score_code, encode_pattern, decode_pattern, parse_pattern,
    encode_words, pattern_codes,
)
from .constraints import (
    ConstraintSet, update_constraints, constraints_from_history,
    is_consistent, filter_candidates, filter_by_history,
)
from .validation import normalize_word, validate_pattern, validate_guess
from .errors import (
    RankerError, InvalidWordLengthError, InvalidAlphabetError, InvalidPatternError,
    EmptyPoolError, GuessNotAllowedError, SessionClosedError, RankingCancelled,
)

__all__ = [
    "WORD_LENGTH", "HIT", "PRESENT", "ABSENT", "SOLVED", "NUM_PATTERNS",
    "score", "score_code", "encode_pattern", "decode_pattern", "parse_pattern",
    "encode_words", "pattern_codes",
    "ConstraintSet", "update_constraints", "constraints_from_history",
    "is_consistent", "filter_candidates", "filter_by_history",
    "normalize_word", "validate_pattern", "validate_guess",
    "RankerError", "InvalidWordLengthError", "InvalidAlphabetError", "InvalidPatternError",
    "EmptyPoolError", "GuessNotAllowedError", "SessionClosedError", "RankingCancelled",
]
