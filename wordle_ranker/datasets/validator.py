"""
Word-list validator.

What this module does:
- Check a pair of word lists: the possible-answers list (initial pool) and
  the allowed-guesses list (guess universe).
- Count valid words (5 letters a–z after strip + lowercase), invalid lines
  and duplicates; compute SHA-256 of the raw files.
- Check that answers ⊆ allowed. The session merges the two lists anyway,
  so a violation is reported but does not fail validation.
- Return a machine-readable dict (for manifests) and a one-line summary.

Typical use:
    from wordle_ranker.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists("data/possible_answers.txt", "data/allowed_guesses.txt")
    print(pretty_summary(rep))
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Set, Tuple

from wordle_ranker.engine import WORD_LENGTH, RankerError, normalize_word


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str
    exists: bool
    count: int = 0          # valid words, duplicates included
    unique_count: int = 0
    invalid_lines: int = 0  # blank lines are ignored, not invalid
    sha256: str = ""


@dataclass
class ValidationReport:
    N: int
    answers: FileReport
    allowed: FileReport
    answers_subset_allowed: bool = False
    passed: bool = False
    issues: List[str] = field(default_factory=list)


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _scan(path: Path) -> Tuple[FileReport, Set[str]]:
    rep = FileReport(path=str(path), exists=path.exists())
    words: Set[str] = set()
    if not rep.exists:
        return rep, words

    with path.open("r", encoding="utf-8") as f:
        for raw in f:
            if not raw.strip():
                continue
            try:
                words.add(normalize_word(raw))
                rep.count += 1
            except RankerError:
                rep.invalid_lines += 1

    rep.unique_count = len(words)
    rep.sha256 = _sha256_file(path)
    return rep, words


def validate_wordlists(answers_path: str, allowed_path: str) -> Dict:
    """
    Validate the answers/allowed word lists.

    Returns a JSON-serializable dict (ValidationReport schema). `passed` is
    strict about content: both files exist, both hold at least one valid
    word, and neither has invalid lines.
    """
    ans, ans_words = _scan(Path(answers_path))
    alw, alw_words = _scan(Path(allowed_path))
    rep = ValidationReport(N=WORD_LENGTH, answers=ans, allowed=alw)

    for name, fr in (("answers", ans), ("allowed", alw)):
        if not fr.exists:
            rep.issues.append(f"{name} file not found: {fr.path}")
            continue
        if fr.count == 0:
            rep.issues.append(f"{name} file contains 0 valid words")
        if fr.invalid_lines:
            rep.issues.append(f"{name} has {fr.invalid_lines} invalid line(s)")
        if fr.count != fr.unique_count:
            rep.issues.append(f"{name} contains duplicate lines")

    rep.answers_subset_allowed = ans.exists and alw.exists and ans_words <= alw_words
    if ans.exists and alw.exists and not rep.answers_subset_allowed:
        missing = sorted(ans_words - alw_words)[:5]
        rep.issues.append(f"answers not subset of allowed (e.g., {missing}); lists will be merged")

    rep.passed = (
            ans.exists and alw.exists
            and ans.count > 0 and alw.count > 0
            and ans.invalid_lines == 0 and alw.invalid_lines == 0
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    Compact one-liner for the console, e.g.

        N=5 | answers=2315 (uniq=2315, sha=abc123...) | allowed=12972 (uniq=12972, sha=def456...) | answers⊆allowed=True | OK
    """
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    return (
        f"N={report['N']} | answers={a['count']} (uniq={a['unique_count']}, sha={a['sha256'][:12]}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b['sha256'][:12]}) "
        f"| answers⊆allowed={report['answers_subset_allowed']} | {status}"
    )
