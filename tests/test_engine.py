import itertools
from collections import Counter

import numpy as np
import pytest

from wordle_ranker.engine import (
    InvalidAlphabetError, InvalidPatternError, InvalidWordLengthError,
    decode_pattern, encode_pattern, encode_words, normalize_word, parse_pattern,
    pattern_codes, score, score_code, validate_guess, validate_pattern,
)

# words chosen for repeated letters in both guess and answer roles
WORDS = ["speed", "erase", "belle", "level", "lemon", "cools", "scoop", "sassy",
         "brass", "eerie", "there", "apple", "angle", "ankle", "crane", "geese", "llama"]


# --- golden patterns (duplicates + placements) ---
@pytest.mark.parametrize("guess,answer,expected", [
    ("belle", "level", "-GYYY"),
    ("level", "level", "GGGGG"),
    ("lemon", "level", "GG---"),
    ("cools", "scoop", "YYG-Y"),
    ("raise", "crane", "YY--G"),
    ("stare", "crane", "--GYG"),
    ("speed", "erase", "Y-YY-"),
    ("sassy", "brass", "YY-G-"),
    ("speed", "melon", "--Y--"),
    ("apple", "angle", "G--GG"),
])
def test_score_golden(guess, answer, expected):
    assert score(guess, answer) == expected


@pytest.mark.parametrize("guess,answer", list(itertools.product(WORDS, WORDS)))
def test_marks_per_letter_never_exceed_answer_count(guess, answer):
    patt = score(guess, answer)
    marked = Counter(ch for ch, m in zip(guess, patt) if m != "-")
    g, a = Counter(guess), Counter(answer)
    for ch in g:
        assert marked[ch] == min(g[ch], a[ch])


@pytest.mark.parametrize("word", WORDS)
def test_self_score_is_solved(word):
    assert score(word, word) == "GGGGG"


def test_pattern_codes_roundtrip_edges():
    assert encode_pattern("-----") == 0
    assert encode_pattern("GGGGG") == 242
    assert encode_pattern("Y----") == 81
    assert decode_pattern(242) == "GGGGG"
    assert decode_pattern(encode_pattern("-GYYY")) == "-GYYY"
    with pytest.raises(InvalidPatternError):
        decode_pattern(243)


def test_vectorised_codes_match_scalar_scorer():
    answers = encode_words(WORDS)
    for i, g in enumerate(WORDS):
        got = pattern_codes(answers[i], answers)
        want = np.array([score_code(g, a) for a in WORDS])
        assert got.tolist() == want.tolist(), g


def test_encode_words_shape():
    m = encode_words(["abcde", "zzzzz"])
    assert m.shape == (2, 5)
    assert m[0].tolist() == [0, 1, 2, 3, 4]
    assert m[1].tolist() == [25] * 5
    assert encode_words([]).shape == (0, 5)


@pytest.mark.parametrize("text,expected", [
    ("g g b b g", "GG--G"),
    ("GY--G", "GY--G"),
    ("gybbg", "GY--G"),
    ("21002", "GY--G"),
    ("..y.g", "--Y-G"),
])
def test_parse_pattern(text, expected):
    assert parse_pattern(text) == expected


@pytest.mark.parametrize("text", ["gybbz", "gyb", "gybbgg", ""])
def test_parse_pattern_rejects(text):
    with pytest.raises(InvalidPatternError):
        parse_pattern(text)


def test_normalize_word():
    assert normalize_word(" CRANE ") == "crane"
    with pytest.raises(InvalidWordLengthError):
        normalize_word("cranes")
    with pytest.raises(InvalidAlphabetError):
        normalize_word("cr4ne")
    with pytest.raises(InvalidAlphabetError):
        normalize_word("crâne")


def test_validate_pattern_rejects_present_after_absent():
    # second 'e' cannot be present when the first one was already absent
    with pytest.raises(InvalidPatternError):
        validate_pattern("speed", "---Y-")
    assert validate_pattern("speed", "--y--") == "--Y--"
    # a later hit after an absent of the same letter is fine
    assert validate_pattern("eerie", "-G--G") == "-G--G"


def test_validate_guess_n5():
    allowed = ["crane", "raise", "stare"]
    assert validate_guess("CRANE", allowed) is True
    assert validate_guess("cranes", allowed) is False
    assert validate_guess("???", allowed) is False
    assert validate_guess("trace", set(allowed)) is False
