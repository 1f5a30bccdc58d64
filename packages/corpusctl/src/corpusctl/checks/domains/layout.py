from __future__ import annotations

from collections import defaultdict

from ..model import CheckContext, CheckDef, Severity, Violation


def check_unique_paths(ctx: CheckContext) -> list[Violation]:
    groups: dict[str, list[str]] = defaultdict(list)
    for path in ctx.corpus.paths():
        groups[path.casefold()].append(path)
    out: list[Violation] = []
    for paths in groups.values():
        if len(paths) < 2:
            continue
        for path in paths:
            others = ", ".join(p for p in paths if p != path)
            out.append(Violation("LAYOUT_DUPLICATE_PATH", f"path collides with {others} on case-insensitive file systems", path))
    return out


def check_readable(ctx: CheckContext) -> list[Violation]:
    return [
        Violation("LAYOUT_UNREADABLE", reason, path)
        for path, reason in sorted(ctx.corpus.load_errors.items())
    ]


def check_no_orphans(ctx: CheckContext) -> list[Violation]:
    from ...index.graph import build_graph

    graph = build_graph(ctx.corpus)
    return [
        Violation("LAYOUT_ORPHAN", "document is not referenced by any other document", path, 0, Severity.WARN)
        for path in graph.orphans(ctx.config)
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("layout.unique_paths", "layout", "forbid documents whose paths differ only by case", check_unique_paths, fix_hint="Rename one of the colliding files.", tags=("required",)),
    CheckDef("layout.readable", "layout", "require every corpus document to decode as UTF-8", check_readable, fix_hint="Re-save the file as UTF-8."),
    CheckDef("layout.no_orphans", "layout", "expect every non-index document to be linked from another document", check_no_orphans, severity=Severity.WARN, fix_hint="Link the document from a TOC, index page or related article."),
)


def register() -> tuple[CheckDef, ...]:
    return CHECKS
