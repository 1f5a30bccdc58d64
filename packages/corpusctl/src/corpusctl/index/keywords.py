from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from ..model import Corpus


@dataclass(frozen=True)
class SearchHit:
    path: str
    title: str
    match: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "title": self.title, "match": self.match}


@dataclass
class KeywordIndex:
    """Case-insensitive keyword -> document paths mapping."""

    entries: dict[str, list[str]] = field(default_factory=dict)
    titles: dict[str, str] = field(default_factory=dict)

    def paths_for(self, keyword: str) -> list[str]:
        return list(self.entries.get(keyword.strip().casefold(), []))

    def search(self, query: str) -> list[SearchHit]:
        needle = query.strip().casefold()
        if not needle:
            return []
        hits: dict[str, SearchHit] = {}
        for path in self.paths_for(needle):
            hits[path] = SearchHit(path, self.titles.get(path, ""), "keyword")
        for path, title in self.titles.items():
            if path not in hits and needle in title.casefold():
                hits[path] = SearchHit(path, title, "title")
        return [hits[p] for p in sorted(hits)]

    def to_dict(self) -> dict[str, list[str]]:
        return {kw: list(paths) for kw, paths in sorted(self.entries.items())}


def build_keyword_index(corpus: Corpus) -> KeywordIndex:
    entries: dict[str, set[str]] = defaultdict(set)
    titles: dict[str, str] = {}
    for doc in corpus:
        titles[doc.path] = doc.title
        for keyword in doc.keywords:
            entries[keyword.casefold()].add(doc.path)
    return KeywordIndex(entries={kw: sorted(paths) for kw, paths in entries.items()}, titles=titles)
