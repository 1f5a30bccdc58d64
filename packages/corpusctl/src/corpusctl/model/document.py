from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping


class ReferenceKind(str, Enum):
    INTERNAL = "internal"
    ANCHOR = "anchor"
    EXTERNAL = "external"
    XREF = "xref"
    MAILTO = "mailto"


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    line: int
    anchor: str

    def to_dict(self) -> dict[str, object]:
        return {"level": self.level, "text": self.text, "line": self.line, "anchor": self.anchor}


@dataclass(frozen=True)
class CrossReference:
    source: str
    text: str
    target: str
    kind: ReferenceKind
    line: int
    image: bool = False

    @property
    def target_path(self) -> str:
        return self.target.split("#", 1)[0].split("?", 1)[0]

    @property
    def fragment(self) -> str:
        if "#" not in self.target:
            return ""
        return self.target.split("#", 1)[1]

    @property
    def canonical_key(self) -> tuple[str, int, str]:
        return (self.source, self.line, self.target)

    def to_dict(self) -> dict[str, object]:
        return {
            "text": self.text,
            "target": self.target,
            "kind": self.kind.value,
            "line": self.line,
            "image": self.image,
        }


@dataclass(frozen=True)
class CodeSample:
    source: str
    language: str
    content: str
    line: int
    closed: bool = True

    @property
    def line_count(self) -> int:
        return len(self.content.splitlines())

    def to_dict(self) -> dict[str, object]:
        return {"language": self.language, "line": self.line, "closed": self.closed, "lines": self.line_count}


@dataclass(frozen=True)
class Document:
    path: str
    title: str
    date: date | None
    raw_date: str = ""
    keywords: tuple[str, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)
    body: str = ""
    has_header: bool = False
    headings: tuple[Heading, ...] = ()
    references: tuple[CrossReference, ...] = ()
    samples: tuple[CodeSample, ...] = ()
    header_errors: tuple[str, ...] = ()
    undefined_labels: tuple[tuple[str, int], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", str(self.path).strip())
        object.__setattr__(self, "title", str(self.title or "").strip())
        seen: set[str] = set()
        keywords: list[str] = []
        for raw in self.keywords:
            keyword = str(raw).strip()
            if keyword and keyword.casefold() not in seen:
                seen.add(keyword.casefold())
                keywords.append(keyword)
        object.__setattr__(self, "keywords", tuple(keywords))

    @property
    def slug(self) -> str:
        name = self.path.rsplit("/", 1)[-1]
        return name.rsplit(".", 1)[0] if "." in name else name

    @property
    def anchors(self) -> frozenset[str]:
        return frozenset(h.anchor for h in self.headings)

    @property
    def directory(self) -> str:
        return self.path.rsplit("/", 1)[0] if "/" in self.path else ""

    def references_of(self, *kinds: ReferenceKind) -> tuple[CrossReference, ...]:
        return tuple(ref for ref in self.references if ref.kind in kinds)

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "raw_date": self.raw_date,
            "keywords": list(self.keywords),
            "metadata": _jsonable(dict(self.metadata)),
            "headings": [h.to_dict() for h in self.headings],
            "references": [r.to_dict() for r in self.references],
            "samples": [s.to_dict() for s in self.samples],
            "header_errors": list(self.header_errors),
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, date):
        return value.isoformat()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
