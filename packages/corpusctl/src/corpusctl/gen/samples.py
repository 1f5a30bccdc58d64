from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.serialize import dumps_json
from ..model import Corpus

_EXTENSIONS = {
    "bash": "sh",
    "c": "c",
    "console": "txt",
    "cpp": "cpp",
    "cs": "cs",
    "csharp": "cs",
    "fsharp": "fs",
    "fs": "fs",
    "java": "java",
    "javascript": "js",
    "js": "js",
    "json": "json",
    "powershell": "ps1",
    "python": "py",
    "py": "py",
    "sh": "sh",
    "sql": "sql",
    "typescript": "ts",
    "ts": "ts",
    "vb": "vb",
    "xml": "xml",
    "yaml": "yaml",
    "yml": "yaml",
}


@dataclass(frozen=True)
class SampleRecord:
    id: int
    source: str
    line: int
    language: str
    path: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "source": self.source, "line": self.line, "language": self.language, "path": self.path}


def sample_extension(language: str) -> str:
    return _EXTENSIONS.get(language.lower(), "txt")


def extract_samples(corpus: Corpus, out_dir: Path, languages: tuple[str, ...] = ()) -> list[SampleRecord]:
    """Write every closed code sample under `out_dir` and return the manifest rows."""
    wanted = {lang.lower() for lang in languages}
    out_dir.mkdir(parents=True, exist_ok=True)
    for old in out_dir.glob("snippet-*.*"):
        old.unlink()
    records: list[SampleRecord] = []
    for doc in corpus:
        for sample in doc.samples:
            if not sample.closed:
                continue
            if wanted and sample.language not in wanted:
                continue
            idx = len(records) + 1
            out = out_dir / f"snippet-{idx:03d}.{sample_extension(sample.language)}"
            out.write_text(sample.content + "\n", encoding="utf-8")
            records.append(SampleRecord(idx, doc.path, sample.line, sample.language, out.name))
    (out_dir / "manifest.json").write_text(
        dumps_json({"samples": [r.to_dict() for r in records]}, pretty=True) + "\n",
        encoding="utf-8",
    )
    return records
