# apps/cli/rank.py
"""
CLI front end for the guess ranker.

This script:
  1) Validates and loads the word lists (prints counts + SHA).
  2) Replays any --guess WORD PATTERN pairs given on the command line.
  3) Prints the top-K ranked next guesses with a live progress indicator.
  4) With --interactive, keeps reading "WORD PATTERN" lines, re-ranking
     after each; "reset" starts over, "pool" lists candidates, "history" lists
     the guesses so far, "quit" exits.

Patterns accept g/y/b, G/Y/-, or 2/1/0, e.g.  crane gybbg  or  crane "g y - - g".
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from tqdm import tqdm

from wordle_ranker.datasets import load_wordlist, pretty_summary, validate_wordlists
from wordle_ranker.engine import RankerError
from wordle_ranker.ranking import GuessScore, RankingConfig
from wordle_ranker.session import Session, SessionState


def _progress_mode(mode: str) -> str:
    if mode == "auto":
        return "bar" if sys.stderr.isatty() else "plain"
    return mode


class _Progress:
    """Adapts the ranker's on_progress(done, total) to tqdm or plain text."""

    def __init__(self, mode: str):
        self.mode = mode
        self.bar = None
        self.last_print = 0.0
        self.start = time.time()

    def __call__(self, done: int, total: int) -> None:
        if self.mode == "bar":
            if self.bar is None:
                self.bar = tqdm(total=total, ncols=80, desc="Ranking", unit="guess")
            self.bar.update(done - self.bar.n)
        elif self.mode == "plain":
            now = time.time()
            if (now - self.last_print >= 1.0) or (done == total):
                pct = 100.0 * done / max(1, total)
                sys.stderr.write(f"\r[{done}/{total}] {pct:5.1f}% | elapsed {now - self.start:6.1f}s")
                sys.stderr.flush()
                self.last_print = now

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
        elif self.mode == "plain":
            sys.stderr.write("\n")
            sys.stderr.flush()


def format_table(scores: List[GuessScore]) -> str:
    lines = [f"{'#':>3}  {'word':<6} {'entropy':>8} {'P(ans)':>8} {'buckets':>7}"]
    for i, s in enumerate(scores, 1):
        prob = f"{s.probability * 100:6.2f}%" if s.is_candidate else ""
        mark = " *" if s.is_candidate else ""
        lines.append(f"{i:>3}  {s.word:<6} {s.entropy:8.3f} {prob:>8} {s.buckets:>7}{mark}")
    return "\n".join(lines)


def show(session: Session, *, top: int, progress: str) -> None:
    """Print status and, while ACTIVE, the top-K ranking."""
    n = session.pool_size
    if session.state is SessionState.SOLVED:
        print(f"Solved: {session.answer}")
        return
    if session.state is SessionState.EXHAUSTED:
        print("No possible answers left. Check the feedback you entered.")
        return

    print(f"{n} possible answer{'s' if n != 1 else ''}")
    bar = _Progress(_progress_mode(progress))
    try:
        ranked = session.rank(top_k=top, on_progress=None if bar.mode == "off" else bar)
    finally:
        bar.close()
    print(format_table(ranked))


def interactive(session: Session, *, top: int, progress: str, stdin=None) -> None:
    stdin = stdin or sys.stdin
    show(session, top=top, progress=progress)
    for line in stdin:
        cmd = line.strip()
        if not cmd:
            continue
        low = cmd.lower()
        if low in ("quit", "exit", "q"):
            break
        if low == "reset":
            session.reset()
        elif low == "pool":
            print(" ".join(session.pool))
            continue
        elif low == "history":
            if not session.history:
                print("no guesses yet")
            for n, (g, patt) in enumerate(session.history, 1):
                print(f"{n}. {g} {patt}")
            continue
        else:
            parts = cmd.split(None, 1)
            if len(parts) != 2:
                print("expected: WORD PATTERN  (or reset / pool / history / quit)")
                continue
            try:
                session.submit(parts[0], parts[1])
            except RankerError as e:
                print(f"error: {e}")
                continue
        show(session, top=top, progress=progress)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="wordle-ranker — rank next guesses by expected information")
    ap.add_argument("--answers", default="data/possible_answers.txt",
                    help="path to possible answers list (initial pool)")
    ap.add_argument("--allowed", default="data/allowed_guesses.txt",
                    help="path to allowed guesses (merged with answers)")
    ap.add_argument("--guess", nargs=2, action="append", default=[], metavar=("WORD", "PATTERN"),
                    help="an observed guess and its feedback; repeat in play order")
    ap.add_argument("--top", type=int, default=10, help="how many guesses to show")
    ap.add_argument("--tie-bonus", type=float, default=0.1,
                    help="bits added to guesses that are possible answers (0 disables)")
    ap.add_argument("--workers", type=int, default=1, help="threads used for ranking")
    ap.add_argument("--open-vocabulary", action="store_true",
                    help="accept guesses that are not in the allowed list")
    ap.add_argument("--interactive", "-i", action="store_true", help="read guesses from stdin")
    ap.add_argument("--progress", choices=["auto", "bar", "plain", "off"], default="auto",
                    help="Show ranking progress (auto=bar on a terminal, else plain text).")
    ap.add_argument("--verbose", "-v", action="count", default=0, help="-v info, -vv debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rep = validate_wordlists(args.answers, args.allowed)
    print(pretty_summary(rep))
    if not (rep["answers"]["exists"] and rep["allowed"]["exists"]):
        for msg in rep["issues"]:
            print(msg, file=sys.stderr)
        return 2

    try:
        config = RankingConfig(tie_bonus=args.tie_bonus, workers=args.workers)
        session = Session(load_wordlist(args.answers), load_wordlist(args.allowed),
                          enforce_vocabulary=not args.open_vocabulary, config=config)
        for word, patt in args.guess:
            session.submit(word, patt)
    except ValueError as e:  # RankerError or a bad RankingConfig value
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.interactive:
        interactive(session, top=args.top, progress=args.progress)
    else:
        show(session, top=args.top, progress=args.progress)
    return 0


if __name__ == "__main__":
    sys.exit(main())
