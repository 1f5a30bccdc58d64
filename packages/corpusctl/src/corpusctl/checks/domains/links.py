from __future__ import annotations

import re
from urllib.parse import unquote

from ...model import Document, ReferenceKind
from ..external import is_allowed, probe
from ..model import CheckContext, CheckDef, Severity, Violation

_HTML_ANCHOR_RE = re.compile(r"<a\s+[^>]*?(?:name|id)\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)


def document_anchors(doc: Document) -> frozenset[str]:
    explicit = {m.group(1).lower() for m in _HTML_ANCHOR_RE.finditer(doc.body)}
    return frozenset({a.lower() for a in doc.anchors} | explicit)


def check_internal_resolve(ctx: CheckContext) -> list[Violation]:
    out: list[Violation] = []
    for doc in ctx.corpus:
        for ref in doc.references_of(ReferenceKind.INTERNAL):
            raw = unquote(ref.target_path)
            if not raw:
                continue
            resolved = ctx.corpus.resolve(doc.path, raw)
            if resolved is None:
                out.append(Violation("LINKS_OUTSIDE_ROOT", f"link target `{ref.target}` escapes the corpus root", doc.path, ref.line))
            elif not ctx.corpus.exists(resolved):
                out.append(Violation("LINKS_BROKEN", f"broken link target `{ref.target}`", doc.path, ref.line))
    return out


def check_anchors_resolve(ctx: CheckContext) -> list[Violation]:
    out: list[Violation] = []
    anchors: dict[str, frozenset[str]] = {}

    def anchors_for(target: Document) -> frozenset[str]:
        if target.path not in anchors:
            anchors[target.path] = document_anchors(target)
        return anchors[target.path]

    for doc in ctx.corpus:
        for ref in doc.references_of(ReferenceKind.ANCHOR, ReferenceKind.INTERNAL):
            fragment = unquote(ref.fragment).lower()
            if not fragment:
                continue
            if ref.kind == ReferenceKind.ANCHOR:
                target: Document | None = doc
            else:
                resolved = ctx.corpus.resolve(doc.path, unquote(ref.target_path))
                target = ctx.corpus.get(resolved) if resolved else None
            if target is None:
                continue
            if fragment not in anchors_for(target):
                where = "this document" if target is doc else f"`{target.path}`"
                out.append(Violation("LINKS_ANCHOR_MISSING", f"anchor `#{ref.fragment}` not found in {where}", doc.path, ref.line))
    return out


def check_no_empty_targets(ctx: CheckContext) -> list[Violation]:
    out: list[Violation] = []
    for doc in ctx.corpus:
        for ref in doc.references:
            if not ref.target or ref.target == "#":
                label = ref.text or "<empty>"
                out.append(Violation("LINKS_EMPTY_TARGET", f"link `{label}` has an empty target", doc.path, ref.line))
        for label, line in doc.undefined_labels:
            out.append(Violation("LINKS_UNDEFINED_LABEL", f"reference label `[{label}]` is not defined", doc.path, line))
    return out


def check_external_reachable(ctx: CheckContext) -> list[Violation]:
    seen: dict[str, list[tuple[str, int]]] = {}
    for doc in ctx.corpus:
        for ref in doc.references_of(ReferenceKind.EXTERNAL):
            target = ref.target.split("#", 1)[0]
            if not target.startswith(("http://", "https://")):
                continue
            if is_allowed(target, ctx.config.external_allowlist):
                continue
            seen.setdefault(target, []).append((doc.path, ref.line))
    out: list[Violation] = []
    for target, refs in sorted(seen.items()):
        ok, detail = probe(target, ctx.config.external_timeout_s)
        if ok:
            continue
        for path, line in refs:
            out.append(Violation("LINKS_EXTERNAL_UNREACHABLE", f"external link `{target}` failed ({detail})", path, line, Severity.WARN))
    return out


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("links.internal_resolve", "links", "require internal cross references to resolve inside the corpus", check_internal_resolve, fix_hint="Fix the relative path or add the missing document.", tags=("required",)),
    CheckDef("links.anchors_resolve", "links", "require `#fragment` targets to match a heading anchor", check_anchors_resolve, fix_hint="Point the fragment at an existing heading slug."),
    CheckDef("links.no_empty_targets", "links", "forbid empty link targets and undefined reference labels", check_no_empty_targets, fix_hint="Fill in the link target or define the reference label."),
    CheckDef("links.external_reachable", "links", "probe external http(s) link targets", check_external_reachable, severity=Severity.WARN, fix_hint="Update the URL or add its prefix to `external_allowlist`.", tags=("network",), network=True),
)


def register() -> tuple[CheckDef, ...]:
    return CHECKS
