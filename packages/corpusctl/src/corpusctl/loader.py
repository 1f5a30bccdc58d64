from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from .config import DEFAULT_CONFIG, CorpusConfig
from .core.context import RunContext
from .core.logging import log_event
from .errors import ScriptError
from .exit_codes import ERR_CONFIG
from .model import Corpus, Document
from .parse import parse_document

EXCLUDED_DIRS = frozenset({".git", "_site", "obj", "bin", "node_modules", "artifacts", "__pycache__"})


def _excluded(rel: str, patterns: tuple[str, ...]) -> bool:
    return any(fnmatch.fnmatch(rel, pat) or fnmatch.fnmatch(rel, pat.rstrip("/") + "/*") for pat in patterns)


def iter_corpus_files(root: Path, config: CorpusConfig = DEFAULT_CONFIG) -> list[str]:
    """Return sorted corpus-relative paths of every file under `root`."""
    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, topdown=True, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if d not in EXCLUDED_DIRS and not Path(dirpath, d).is_symlink())
        for filename in filenames:
            rel = Path(dirpath, filename).relative_to(root).as_posix()
            if _excluded(rel, config.exclude):
                continue
            files.append(rel)
    return sorted(files)


def is_document_path(rel: str, config: CorpusConfig = DEFAULT_CONFIG) -> bool:
    return any(rel.lower().endswith(suffix.lower()) for suffix in config.suffixes)


def load_document(root: Path, rel: str, config: CorpusConfig = DEFAULT_CONFIG) -> Document:
    text = (root / rel).read_text(encoding="utf-8")
    return parse_document(rel, text, config)


def load_corpus(root: Path, config: CorpusConfig = DEFAULT_CONFIG) -> Corpus:
    if not root.is_dir():
        raise ScriptError(f"corpus root not found: {root}", ERR_CONFIG, kind="missing_root")
    files = iter_corpus_files(root, config)
    corpus = Corpus(files=frozenset(files))
    for rel in files:
        if not is_document_path(rel, config):
            continue
        try:
            corpus.add(load_document(root, rel, config))
        except UnicodeDecodeError as exc:
            corpus.load_errors[rel] = f"not valid UTF-8: {exc.reason} at byte {exc.start}"
        except OSError as exc:
            corpus.load_errors[rel] = f"unreadable: {exc.strerror or exc}"
    return corpus


def load_run_corpus(ctx: RunContext) -> Corpus:
    log_event(ctx, "debug", "loader", "scan", root=ctx.root.as_posix(), config=ctx.config.source or "<defaults>")
    corpus = load_corpus(ctx.root, ctx.config)
    log_event(ctx, "info", "loader", "loaded", documents=len(corpus), files=len(corpus.files), load_errors=len(corpus.load_errors))
    return corpus
