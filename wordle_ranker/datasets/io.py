from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from wordle_ranker.engine import RankerError, normalize_word

log = logging.getLogger(__name__)


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8").splitlines()]


def clean_words(lines: Iterable[str], source: str = "<list>") -> List[str]:
    """
    Normalise words (strip + lowercase), drop blanks and duplicates (first
    occurrence wins), skip anything that is not a 5-letter a–z word.
    """
    out: List[str] = []
    seen = set()
    skipped = 0
    for ln in lines:
        if not ln.strip():
            continue
        try:
            w = normalize_word(ln)
        except RankerError:
            skipped += 1
            continue
        if w not in seen:
            seen.add(w)
            out.append(w)
    if skipped:
        log.warning("%s: skipped %d invalid line(s)", source, skipped)
    return out


def load_wordlist(p: Path | str) -> List[str]:
    """Read and clean a newline-separated word list."""
    words = clean_words(read_lines(p), source=str(p))
    log.info("loaded %d words from %s", len(words), p)
    return words


def write_lines(lines: Iterable[str], p: Path | str) -> str:
    """
    Write lines to a UTF-8 text file, ensuring a trailing newline.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(p)
