import csv
import json

import pytest

from wordle_ranker.harness import run_batch, run_case, summarize, write_csv, write_manifest
from wordle_ranker.ranking import RankingConfig

ANSWERS = ["crane", "raise", "stare", "trace", "cared", "adieu", "alone"]
ALLOWED = ANSWERS + ["slate", "salet", "roate"]


def test_run_case_smoke():
    r = run_case("crane", answers=ANSWERS, allowed=ALLOWED)
    assert "success" in r and "history" in r
    assert r["success"] is True
    assert r["history"][-1] == ("crane", "GGGGG")
    assert r["guesses"] == len(r["history"]) <= 6


def test_run_case_with_fixed_opener_and_no_bonus():
    r = run_case("adieu", answers=ANSWERS, allowed=ALLOWED, first_guess="slate",
                 config=RankingConfig(tie_bonus=0.0))
    assert r["success"] is True
    assert r["history"][0][0] == "slate"


def test_run_case_enforces_six_turns():
    with pytest.raises(ValueError):
        run_case("crane", answers=ANSWERS, allowed=ALLOWED, max_turns=7)


def test_run_batch_solves_everything():
    results = run_batch(ANSWERS, allowed=ALLOWED)
    assert sorted(r["answer"] for r in results) == sorted(ANSWERS)
    assert all(r["success"] for r in results)
    stats = summarize(results)
    assert stats["games"] == stats["wins"] == len(ANSWERS)
    assert 1 <= stats["mean_guesses"] <= stats["max_guesses"] <= 6


def test_run_batch_sample():
    assert len(run_batch(ANSWERS, allowed=ALLOWED, sample=2)) == 2


def test_write_csv_and_manifest(tmp_path):
    results = [{"answer": "crane", "success": True, "guesses": 2, "time_ms": 1.23456,
                "history": [("slate", "--G-G"), ("crane", "GGGGG")]}]
    p = write_csv(results, str(tmp_path / "out" / "run.csv"), max_turns=6)
    with open(p, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["answer"] == "crane"
    assert rows[0]["patt_1"] == "'--G-G"
    assert rows[0]["guess_2"] == "crane"
    assert rows[0]["guess_3"] == "" and rows[0]["patt_6"] == ""
    assert rows[0]["time_ms"] == "1.235"

    m = write_manifest({"run_id": "x", "summary": summarize(results)}, str(tmp_path / "m.json"))
    data = json.loads(open(m, encoding="utf-8").read())
    assert data["summary"]["wins"] == 1
