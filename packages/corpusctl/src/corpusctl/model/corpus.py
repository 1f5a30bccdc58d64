from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Iterator

from ..errors import DuplicateDocumentError
from .document import Document


def normalize_corpus_path(raw: str) -> str | None:
    """Return a normalised corpus-relative POSIX path, or None when it leaves the root."""
    value = str(raw).replace("\\", "/").strip()
    if not value:
        return None
    norm = posixpath.normpath(value.lstrip("/"))
    if norm == "." or norm == ".." or norm.startswith("../"):
        return None
    return norm


@dataclass
class Corpus:
    """Documents of one corpus root, keyed by unique path."""

    documents: dict[str, Document] = field(default_factory=dict)
    files: frozenset[str] = frozenset()
    load_errors: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_documents(cls, documents: list[Document], files: frozenset[str] | None = None) -> "Corpus":
        corpus = cls(files=files or frozenset())
        for doc in documents:
            corpus.add(doc)
        return corpus

    def add(self, doc: Document) -> None:
        if doc.path in self.documents:
            raise DuplicateDocumentError(doc.path)
        self.documents[doc.path] = doc

    def get(self, path: str) -> Document | None:
        return self.documents.get(path)

    def paths(self) -> list[str]:
        return sorted(self.documents)

    def __contains__(self, path: object) -> bool:
        return path in self.documents

    def __iter__(self) -> Iterator[Document]:
        for path in self.paths():
            yield self.documents[path]

    def __len__(self) -> int:
        return len(self.documents)

    def resolve(self, source: str, target: str) -> str | None:
        """Resolve a link target written in `source` to a corpus-relative path."""
        if target.startswith("~/"):
            return normalize_corpus_path(target[2:])
        if target.startswith("/"):
            return normalize_corpus_path(target)
        base = posixpath.dirname(source)
        return normalize_corpus_path(posixpath.join(base, target))

    def exists(self, path: str) -> bool:
        if path in self.documents or path in self.files:
            return True
        prefix = path.rstrip("/") + "/"
        return any(p.startswith(prefix) for p in self.files) or any(p.startswith(prefix) for p in self.documents)
