from __future__ import annotations

from pathlib import Path

from corpusctl.config import load_config
from corpusctl.index import build_graph, build_keyword_index
from corpusctl.loader import load_corpus
from helpers import doc, write_corpus


def test_keyword_index_is_case_insensitive(fixture_corpus: Path) -> None:
    index = build_keyword_index(load_corpus(fixture_corpus))
    assert index.paths_for("cs0029") == ["errors/cs0029.md"]
    assert index.paths_for(" Type Conversion ") == ["errors/cs0029.md"]
    assert index.paths_for("switch expressions") == ["tutorials/pattern-matching.md"]
    assert index.paths_for("unknown") == []
    assert list(index.to_dict()) == sorted(index.to_dict())


def test_search_prefers_keywords_then_titles(corpus_root: Path) -> None:
    write_corpus(
        corpus_root,
        {
            "b.md": doc(title="Pattern matching overview", keywords=("switch",)),
            "a.md": doc(title="Switch statement", keywords=("statements",)),
            "c.md": doc(title="Unrelated", keywords=("other",)),
        },
    )
    index = build_keyword_index(load_corpus(corpus_root))
    hits = index.search("Switch")
    assert [(h.path, h.match) for h in hits] == [("a.md", "title"), ("b.md", "keyword")]
    assert index.search("   ") == []


def test_graph_for_fixture(fixture_corpus: Path) -> None:
    corpus = load_corpus(fixture_corpus)
    graph = build_graph(corpus)
    assert graph.node("errors/cs0029.md") == {
        "path": "errors/cs0029.md",
        "outbound": ["errors/cs0001.md", "tutorials/pattern-matching.md"],
        "inbound": ["errors/cs0001.md", "index.md", "tutorials/pattern-matching.md"],
        "external": [],
    }
    assert graph.node("tutorials/pattern-matching.md")["external"] == [
        "https://learn.microsoft.com/dotnet/csharp/language-reference/operators/patterns"
    ]
    assert graph.dangling == []
    assert graph.orphans(load_config(fixture_corpus)) == []


def test_graph_records_dangling_references(corpus_root: Path) -> None:
    write_corpus(corpus_root, {"a.md": doc(body="[x](missing.md#y)\n[up](../../out.md)\n")})
    graph = build_graph(load_corpus(corpus_root))
    assert [(d.source, d.target, d.line) for d in graph.dangling] == [
        ("a.md", "missing.md#y", 7),
        ("a.md", "../../out.md", 8),
    ]
    assert graph.orphans() == ["a.md"]
