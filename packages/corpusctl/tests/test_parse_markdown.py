from __future__ import annotations

from corpusctl.model import ReferenceKind
from corpusctl.parse import scan_body, slugify
from corpusctl.parse.markdown import classify_target


def test_slugify_matches_heading_anchor_style() -> None:
    assert slugify("Compiler Error CS0029") == "compiler-error-cs0029"
    assert slugify("Type patterns") == "type-patterns"
    assert slugify("The `is` operator") == "the-is-operator"
    assert slugify("C# 9.0: what's new?") == "c-90-whats-new"
    assert slugify("my_func") == "my_func"


def test_classify_target() -> None:
    assert classify_target("#example") == ReferenceKind.ANCHOR
    assert classify_target("cs0001.md") == ReferenceKind.INTERNAL
    assert classify_target("../a/b.md#x") == ReferenceKind.INTERNAL
    assert classify_target("https://learn.microsoft.com") == ReferenceKind.EXTERNAL
    assert classify_target("//cdn.example.com/x.png") == ReferenceKind.EXTERNAL
    assert classify_target("mailto:docs@example.com") == ReferenceKind.MAILTO
    assert classify_target("xref:System.String") == ReferenceKind.XREF


def test_scan_body_collects_headings_with_unique_anchors() -> None:
    scan = scan_body("a.md", "# Title\n\n## Example\n\ntext\n\n## Example\n", first_line=5)
    assert [(h.level, h.text, h.line, h.anchor) for h in scan.headings] == [
        (1, "Title", 5, "title"),
        (2, "Example", 7, "example"),
        (2, "Example", 11, "example-1"),
    ]


def test_scan_body_ignores_content_inside_fences() -> None:
    body = "```csharp\n# not a heading\n[x](nope.md)\n```\n\n~~~\n[y](nope2.md)\n~~~\n"
    scan = scan_body("a.md", body)
    assert scan.headings == []
    assert scan.references == []
    assert [(s.language, s.line, s.closed) for s in scan.samples] == [("csharp", 1, True), ("", 6, True)]
    assert scan.samples[0].content == "# not a heading\n[x](nope.md)"


def test_scan_body_reports_unclosed_fence() -> None:
    scan = scan_body("a.md", "text\n```python\nprint(1)\n")
    assert len(scan.samples) == 1
    assert not scan.samples[0].closed
    assert scan.samples[0].line == 2


def test_scan_body_longer_fence_contains_shorter_one() -> None:
    scan = scan_body("a.md", "````md\n```csharp\nx\n```\n````\n")
    assert len(scan.samples) == 1
    assert scan.samples[0].language == "md"
    assert scan.samples[0].closed


def test_scan_body_extracts_inline_image_and_autolinks() -> None:
    body = (
        "See [CS0029](cs0029.md#example \"title\") and ![diagram](media/flow.png).\n"
        "Visit <https://example.com/docs> or [ref](xref:System.String).\n"
    )
    scan = scan_body("errors/cs0001.md", body, first_line=3)
    got = [(r.text, r.target, r.kind, r.line, r.image) for r in scan.references]
    assert ("CS0029", "cs0029.md#example", ReferenceKind.INTERNAL, 3, False) in got
    assert ("diagram", "media/flow.png", ReferenceKind.INTERNAL, 3, True) in got
    assert ("https://example.com/docs", "https://example.com/docs", ReferenceKind.EXTERNAL, 4, False) in got
    assert ("ref", "xref:System.String", ReferenceKind.XREF, 4, False) in got
    assert len(got) == 4


def test_scan_body_ignores_links_in_code_spans() -> None:
    scan = scan_body("a.md", "Use `[text](target.md)` syntax, then [real](real.md).\n")
    assert [r.target for r in scan.references] == ["real.md"]


def test_scan_body_resolves_reference_style_links() -> None:
    body = "See [CS0001][cs1], [Collapsed][] and [shortcut].\n\n[cs1]: cs0001.md\n[collapsed]: c.md\n[Shortcut]: <s.md> \"Title\"\n"
    scan = scan_body("a.md", body)
    assert sorted(r.target for r in scan.references) == ["c.md", "cs0001.md", "s.md"]
    assert scan.undefined_labels == []


def test_scan_body_records_undefined_labels() -> None:
    scan = scan_body("a.md", "See [CS0001][missing].\n\n- [ ] not a link\n> [!NOTE]\n")
    assert scan.undefined_labels == [("missing", 1)]
    assert scan.references == []


def test_scan_body_image_inside_link() -> None:
    scan = scan_body("a.md", "[![badge](badge.svg)](https://ci.example.com)\n")
    targets = sorted((r.target, r.image) for r in scan.references)
    assert targets == [("badge.svg", True), ("https://ci.example.com", False)]


def test_scan_body_empty_target_is_kept() -> None:
    scan = scan_body("a.md", "[todo]()\n")
    assert len(scan.references) == 1
    assert scan.references[0].target == ""


def test_scan_body_keeps_balanced_parentheses_in_targets() -> None:
    body = (
        "See [Foo](https://en.wikipedia.org/wiki/Foo_(bar)) (external).\n"
        "![chart](media/chart_(v2).png \"Chart\") and [local](a_(b).md#x).\n"
    )
    scan = scan_body("a.md", body)
    assert [(r.target, r.image) for r in scan.references] == [
        ("https://en.wikipedia.org/wiki/Foo_(bar)", False),
        ("media/chart_(v2).png", True),
        ("a_(b).md#x", False),
    ]
    assert scan.references[2].target_path == "a_(b).md"
