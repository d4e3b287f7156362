"""
Self-play harness.

- run_case:  play one hidden answer, always guessing the session's top-ranked
             word and feeding back the real pattern.
- run_batch: play many answers back to back (optionally only the first K).
- Enforces Wordle's 6-turn limit at the harness layer.

Useful to sanity-check the ranker end to end and to measure average guess
counts for a given tie bonus. UI-agnostic: the CLI, a notebook or a test
can all call it.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Iterable, List, Optional, Tuple

from wordle_ranker.engine import SOLVED, normalize_word, score
from wordle_ranker.ranking import RankingConfig
from wordle_ranker.session import Session, SessionState

log = logging.getLogger(__name__)

# Single source of truth for Wordle turn budget.
WORDLE_MAX_TURNS = 6


def _assert_wordle_turns(max_turns: int) -> None:
    """Guardrail: prevent accidental runs with >6 turns."""
    if max_turns != WORDLE_MAX_TURNS:
        raise ValueError(f"max_turns must be {WORDLE_MAX_TURNS} for Wordle-like rules; got {max_turns}")


def _next_guess(session: Session) -> Optional[str]:
    # once the pool is down to one word the session stops ranking; just play it
    if session.state is SessionState.SOLVED:
        return session.answer
    ranked = session.rank(top_k=1)
    return ranked[0].word if ranked else None


def play(session: Session, answer: str, *, first_guess: Optional[str] = None) -> Dict:
    """
    Play `answer` to completion on an existing session (which is reset first).

    Returns:
        dict with keys:
            success (bool), guesses (int), time_ms (float),
            history (list[(guess, pattern)]), answer (str)
    """
    answer = normalize_word(answer)
    session.reset()
    history: List[Tuple[str, str]] = []
    success = False

    t0 = time.perf_counter()
    for turn in range(1, WORDLE_MAX_TURNS + 1):
        guess = normalize_word(first_guess) if (turn == 1 and first_guess) else _next_guess(session)
        if guess is None:
            log.warning("pool exhausted while playing %r; is it in the answer list?", answer)
            break

        patt = score(guess, answer)
        history.append((guess, patt))

        if patt == SOLVED:
            success = True
            break
        if session.state is not SessionState.ACTIVE:
            break

        session.submit(guess, patt)

    return {
        "success": success,
        "guesses": len(history),
        "time_ms": (time.perf_counter() - t0) * 1000.0,
        "history": history,
        "answer": answer,
    }


def run_case(
        answer: str,
        *,
        answers: Iterable[str],
        allowed: Iterable[str],
        max_turns: int = WORDLE_MAX_TURNS,
        config: Optional[RankingConfig] = None,
        first_guess: Optional[str] = None,
) -> Dict:
    """
    Execute one game until the ranker wins or the turn budget is exhausted.

    Args:
        answer:      the hidden word for this case
        answers:     the official answer pool (candidate universe)
        allowed:     words permitted as guesses (merged with answers)
        max_turns:   must be 6 (Wordle rule; enforced)
        config:      RankingConfig for the session
        first_guess: fixed opening word; skips the most expensive ranking
    """
    _assert_wordle_turns(max_turns)
    session = Session(answers, allowed, config=config)
    return play(session, answer, first_guess=first_guess)


def run_batch(
        answers: List[str],
        *,
        allowed: List[str],
        max_turns: int = WORDLE_MAX_TURNS,
        config: Optional[RankingConfig] = None,
        first_guess: Optional[str] = None,
        sample: int | None = None,
) -> List[Dict]:
    """
    Run many cases back-to-back on one session. If 'sample' is provided,
    only the first K answers are played.
    """
    _assert_wordle_turns(max_turns)

    session = Session(answers, allowed, config=config)
    cases = list(session.pool) if sample is None else list(session.pool)[:sample]

    out: List[Dict] = []
    for ans in cases:
        r = play(session, ans, first_guess=first_guess)
        log.debug("%s: %s in %d", ans, "solved" if r["success"] else "failed", r["guesses"])
        out.append(r)
    return out
