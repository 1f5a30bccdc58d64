"""Corpus root detection helpers.

`Path.cwd()` is only allowed in this module.
"""

from __future__ import annotations

from pathlib import Path

from ..config.loader import CONFIG_FILENAME


def find_corpus_root(start: Path | None = None) -> Path:
    cur = (start or Path.cwd()).resolve()
    if cur.is_file():
        cur = cur.parent
    origin = cur
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            return origin
        cur = cur.parent


def evidence_root_path(root: Path, raw: str | None) -> Path:
    if not raw:
        return (root / "artifacts/evidence").resolve()
    candidate = Path(raw)
    return candidate.resolve() if candidate.is_absolute() else (root / candidate).resolve()
