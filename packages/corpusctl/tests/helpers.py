from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from corpusctl.checks import CheckContext
from corpusctl.config import DEFAULT_CONFIG, CorpusConfig
from corpusctl.loader import load_corpus

SRC = Path(__file__).resolve().parents[1] / "src"


def doc(title: str = "Compiler Error CS0001", date: str = "07/20/2015", keywords: tuple[str, ...] = ("CS0001",), body: str = "# Heading\n") -> str:
    lines = ["---"]
    if title:
        lines.append(f'title: "{title}"')
    if date:
        lines.append(f"ms.date: {date}")
    if keywords:
        lines.append("f1_keywords:")
        lines.extend(f'  - "{kw}"' for kw in keywords)
    lines.append("---")
    return "\n".join(lines) + "\n" + body


def write_corpus(root: Path, files: dict[str, str]) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


def check_context(root: Path, files: dict[str, str] | None = None, config: CorpusConfig = DEFAULT_CONFIG) -> CheckContext:
    if files:
        write_corpus(root, files)
    return CheckContext(corpus=load_corpus(root, config), root=root, config=config)


def run_corpusctl(*args: str, cwd: Path | None = None, evidence_root: Path | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC)
    env.pop("CI", None)
    env.setdefault("CORPUSCTL_RUN_ID", "pytest-run")
    if evidence_root is not None:
        env["CORPUSCTL_EVIDENCE_ROOT"] = str(evidence_root)
    return subprocess.run(
        [sys.executable, "-m", "corpusctl.cli", *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
