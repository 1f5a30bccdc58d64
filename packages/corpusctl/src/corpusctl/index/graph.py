from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from urllib.parse import unquote

from ..config import DEFAULT_CONFIG, CorpusConfig
from ..model import Corpus, ReferenceKind


@dataclass(frozen=True)
class DanglingReference:
    source: str
    target: str
    line: int

    def to_dict(self) -> dict[str, object]:
        return {"source": self.source, "target": self.target, "line": self.line}


@dataclass
class ReferenceGraph:
    outbound: dict[str, set[str]] = field(default_factory=dict)
    inbound: dict[str, set[str]] = field(default_factory=dict)
    external: dict[str, set[str]] = field(default_factory=dict)
    dangling: list[DanglingReference] = field(default_factory=list)

    def orphans(self, config: CorpusConfig = DEFAULT_CONFIG) -> list[str]:
        return sorted(
            path
            for path in self.outbound
            if not (self.inbound.get(path, set()) - {path}) and not config.is_index_page(path)
        )

    def node(self, path: str) -> dict[str, object]:
        return {
            "path": path,
            "outbound": sorted(self.outbound.get(path, set())),
            "inbound": sorted(self.inbound.get(path, set())),
            "external": sorted(self.external.get(path, set())),
        }


def build_graph(corpus: Corpus) -> ReferenceGraph:
    outbound: dict[str, set[str]] = {path: set() for path in corpus.paths()}
    inbound: dict[str, set[str]] = defaultdict(set)
    external: dict[str, set[str]] = defaultdict(set)
    dangling: list[DanglingReference] = []
    for doc in corpus:
        for ref in doc.references:
            if ref.kind == ReferenceKind.EXTERNAL:
                external[doc.path].add(ref.target)
                continue
            if ref.kind != ReferenceKind.INTERNAL or not ref.target_path:
                continue
            resolved = corpus.resolve(doc.path, unquote(ref.target_path))
            if resolved is None or not corpus.exists(resolved):
                dangling.append(DanglingReference(doc.path, ref.target, ref.line))
                continue
            if resolved not in corpus and f"{resolved.rstrip('/')}/index.md" in corpus:
                resolved = f"{resolved.rstrip('/')}/index.md"
            if resolved in corpus:
                outbound[doc.path].add(resolved)
                inbound[resolved].add(doc.path)
    return ReferenceGraph(
        outbound=outbound,
        inbound=dict(inbound),
        external=dict(external),
        dangling=sorted(dangling, key=lambda d: (d.source, d.line, d.target)),
    )
