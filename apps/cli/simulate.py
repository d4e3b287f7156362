# apps/cli/simulate.py
"""
Self-play benchmark for the ranker.

This script:
  1) Validates the word lists (prints counts + SHA).
  2) Plays every answer (or a seeded sample) by always guessing the top-ranked
     word, with a live progress indicator.
  3) Writes:
       - CSV:  per-game results + guess/pattern history columns
       - JSON: manifest with config, word-list hashes and a summary
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from wordle_ranker.datasets import load_wordlist, pretty_summary, validate_wordlists
from wordle_ranker.harness import (
    WORDLE_MAX_TURNS, play, summarize, timestamp_id, write_csv, write_manifest,
)
from wordle_ranker.ranking import RankingConfig
from wordle_ranker.session import Session


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="wordle-ranker — self-play benchmark")
    ap.add_argument("--answers", default="data/possible_answers.txt",
                    help="path to possible answers list")
    ap.add_argument("--allowed", default="data/allowed_guesses.txt",
                    help="path to allowed guesses (merged with answers)")
    ap.add_argument("--first-guess", default="salet",
                    help="fixed opening word ('' ranks the opener too; slow)")
    ap.add_argument("--tie-bonus", type=float, default=0.1)
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("--sample", type=int, help="play only a subset of answers (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="RNG seed for --sample")
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--progress", choices=["auto", "bar", "plain", "off"], default="auto")
    ap.add_argument("--verbose", "-v", action="count", default=0)
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING - 10 * min(args.verbose, 2),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    rep = validate_wordlists(args.answers, args.allowed)
    print(pretty_summary(rep))
    if not rep["passed"]:
        for msg in rep["issues"]:
            print(msg, file=sys.stderr)
        return 2

    answers = load_wordlist(args.answers)
    allowed = load_wordlist(args.allowed)
    config = RankingConfig(tie_bonus=args.tie_bonus, workers=args.workers)
    session = Session(answers, allowed, config=config)

    first_guess = args.first_guess.strip().lower() or None
    if first_guess and first_guess not in session.allowed:
        logging.getLogger(__name__).warning("opener %r is not an allowed guess; ranking it instead",
                                            first_guess)
        first_guess = None

    cases = list(answers)
    if args.sample and args.sample < len(cases):
        rng = random.Random(args.seed)
        rng.shuffle(cases)
        cases = cases[: args.sample]
    total = len(cases)

    mode = args.progress
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"
    iterator = tqdm(cases, ncols=80, desc="Playing", unit="game") if mode == "bar" else cases

    results = []
    start = time.time()
    last_print = 0.0
    for idx, ans in enumerate(iterator, 1):
        results.append(play(session, ans, first_guess=first_guess))

        if mode == "plain":
            now = time.time()
            if (now - last_print >= 1.0) or (idx == total):
                elapsed = now - start
                rate = (idx / elapsed) if elapsed > 0 else 0.0
                remaining = (total - idx) / rate if rate > 0 else 0.0
                sys.stderr.write(
                    f"\r[{idx}/{total}] {100.0 * idx / max(1, total):5.1f}% "
                    f"| elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s")
                sys.stderr.flush()
                last_print = now
    if mode == "plain":
        sys.stderr.write("\n")
        sys.stderr.flush()

    stats = summarize(results)
    print(f"won {stats['wins']}/{stats['games']} | mean guesses {stats['mean_guesses']:.3f} "
          f"| worst {stats['max_guesses']}")

    run_id = timestamp_id()
    outdir = Path(args.outdir)
    csv_path = write_csv(results, str(outdir / f"sim_{run_id}.csv"), max_turns=WORDLE_MAX_TURNS)
    manifest_path = write_manifest({
        "run_id": run_id,
        "config": vars(args),
        "wordlists": rep,
        "summary": stats,
    }, str(outdir / f"sim_{run_id}_manifest.json"))

    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
