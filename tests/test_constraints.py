import itertools

import pytest

from wordle_ranker.engine import (
    ConstraintSet, constraints_from_history, filter_by_history, filter_candidates,
    is_consistent, score, update_constraints,
)

POOL = ["crane", "raise", "stare", "trace", "cared", "racer", "scoop", "speed", "erase",
        "melon", "level", "belle", "apple", "angle", "ankle", "geese", "there", "eerie",
        "sassy", "brass", "lemon", "cools"]
GUESSES = ["raise", "speed", "level", "sassy", "cools"]


def test_update_from_simple_pattern():
    cs = update_constraints(ConstraintSet(), "raise", "YY--G")
    assert cs.fixed == {4: "e"}
    assert cs.min_count == {"r": 1, "a": 1, "e": 1}
    assert cs.max_count == {"i": 0, "s": 0}
    assert "r" in cs.excluded_at[0] and "a" in cs.excluded_at[1]
    assert "i" in cs.excluded_at[2] and "s" in cs.excluded_at[3]


def test_absent_duplicate_caps_at_matched_count():
    # speed vs melon -> "--Y--": exactly one 'e', not at positions 2 or 3
    cs = update_constraints(ConstraintSet(), "speed", "--Y--")
    assert cs.min_count["e"] == 1
    assert cs.max_count["e"] == 1
    assert cs.max_count["s"] == 0 and cs.max_count["d"] == 0
    assert is_consistent("melon", cs)
    assert is_consistent("crane", cs)
    assert not is_consistent("geese", cs)   # three e's
    assert not is_consistent("level", cs)   # two e's
    assert not is_consistent("raise", cs)   # contains s


def test_hit_fixes_position():
    cs = update_constraints(ConstraintSet(), "apple", "G--GG")
    assert cs.fixed == {0: "a", 3: "l", 4: "e"}
    assert cs.max_count["p"] == 0
    assert filter_candidates(POOL, cs) == ["angle", "ankle"]


def test_clear_copy_and_empty():
    cs = constraints_from_history([("raise", "YY--G")])
    snap = cs.copy()
    cs.clear()
    assert cs.is_empty()
    assert not snap.is_empty()
    assert snap.fixed == {4: "e"}
    assert ConstraintSet().is_empty()


@pytest.mark.parametrize("answer", POOL)
def test_constraint_filter_matches_rescoring(answer):
    # every one- and two-guess history produced by a real answer
    for g1, g2 in itertools.product(GUESSES, repeat=2):
        history = [(g1, score(g1, answer)), (g2, score(g2, answer))]
        for h in (history[:1], history):
            got = filter_candidates(POOL, constraints_from_history(h))
            assert got == filter_by_history(POOL, h), (answer, h)
            assert answer in got


@pytest.mark.parametrize("answer", ["crane", "level", "sassy", "angle"])
def test_incremental_equals_replay_and_is_monotonic(answer):
    cs = ConstraintSet()
    pool = list(POOL)
    history = []
    prev = len(pool)
    for g in GUESSES:
        patt = score(g, answer)
        history.append((g, patt))
        update_constraints(cs, g, patt)
        pool = filter_candidates(pool, cs)
        assert len(pool) <= prev
        prev = len(pool)
        # replaying the whole history over the original pool gives the same set
        assert pool == filter_candidates(POOL, constraints_from_history(history))
        # idempotent
        assert filter_candidates(pool, cs) == pool


@pytest.mark.parametrize("words,history", [
    # a looser count cap after a tighter one
    (["fghei", "fghej", "fghee"], [("eeabc", "Y----"), ("eeeab", "YY---")]),
    # two different letters fixed at the same position
    (["abcde", "xbcde", "abcdx"], [("azzzz", "G----"), ("xzzzz", "G----")]),
])
def test_contradictory_feedback_keeps_replay_equal_to_incremental(words, history):
    cs = ConstraintSet()
    pool = list(words)
    prev = len(pool)
    for k, (g, patt) in enumerate(history, 1):
        update_constraints(cs, g, patt)
        pool = filter_candidates(pool, cs)
        assert len(pool) <= prev
        prev = len(pool)
        assert pool == filter_candidates(words, constraints_from_history(history[:k]))
    assert pool == []


def test_tighter_max_count_survives_later_guess():
    cs = constraints_from_history([("eeabc", "Y----"), ("eeeab", "YY---")])
    assert cs.max_count["e"] == 1
    assert cs.min_count["e"] == 2
