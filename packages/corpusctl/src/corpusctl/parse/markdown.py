"""Line-oriented Markdown body scanner.

Extracts headings, fenced code samples and cross references. Content inside
code fences and inline code spans never produces headings or references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..model.document import CodeSample, CrossReference, Heading, ReferenceKind

_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})\s*([^`]*?)\s*$")
_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
_REF_DEF_RE = re.compile(r"^ {0,3}\[([^\]]+)\]:[ \t]*<?([^\s>]*)>?(?:[ \t]+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?[ \t]*$")
_CODE_SPAN_RE = re.compile(r"(`+)(.+?)\1")
# link destination: no whitespace, at most one level of balanced parentheses
_DEST = r"((?:[^()\s<>]|\([^()\s<>]*\))*)"
_TITLE = r"(?:\s+(?:\"[^\"]*\"|'[^']*'))?"
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(\s*<?" + _DEST + r">?" + _TITLE + r"\s*\)")
_LINK_RE = re.compile(
    r"(?<![!\\])\[((?:[^\[\]]|!\[[^\]]*\]\((?:[^()]|\([^()]*\))*\))*)\]\(\s*<?" + _DEST + r">?" + _TITLE + r"\s*\)"
)
_FULL_REF_RE = re.compile(r"(?<![!\\\]])\[([^\[\]]+)\]\[([^\[\]]*)\]")
_SHORTCUT_REF_RE = re.compile(r"(?<![!\\\]])\[([^\[\]]+)\](?![\[(:])")
_AUTOLINK_RE = re.compile(r"<((?:https?://|mailto:|xref:)[^>\s]+)>")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_SLUG_DROP_RE = re.compile(r"[^\w\- ]", re.UNICODE)
_INLINE_MARKUP_RE = re.compile(r"[*`]|<[^>]+>")


@dataclass
class BodyScan:
    headings: list[Heading] = field(default_factory=list)
    references: list[CrossReference] = field(default_factory=list)
    samples: list[CodeSample] = field(default_factory=list)
    undefined_labels: list[tuple[str, int]] = field(default_factory=list)


def slugify(text: str) -> str:
    plain = _INLINE_MARKUP_RE.sub("", text)
    plain = re.sub(r"\[([^\]]*)\]\([^)]*\)", r"\1", plain)
    plain = _SLUG_DROP_RE.sub("", plain.strip().lower())
    return plain.replace(" ", "-")


def classify_target(target: str) -> ReferenceKind:
    if target.startswith("#"):
        return ReferenceKind.ANCHOR
    lowered = target.lower()
    if lowered.startswith("xref:"):
        return ReferenceKind.XREF
    if lowered.startswith("mailto:"):
        return ReferenceKind.MAILTO
    if target.startswith("//") or _SCHEME_RE.match(target):
        return ReferenceKind.EXTERNAL
    return ReferenceKind.INTERNAL


def _mask_code_spans(line: str) -> str:
    return _CODE_SPAN_RE.sub(lambda m: " " * len(m.group(0)), line)


def _collect_definitions(lines: list[str]) -> dict[str, str]:
    definitions: dict[str, str] = {}
    in_fence = ""
    for line in lines:
        opened = _FENCE_OPEN_RE.match(line)
        if in_fence:
            if opened and opened.group(1)[0] == in_fence[0] and len(opened.group(1)) >= len(in_fence) and not opened.group(2):
                in_fence = ""
            continue
        if opened:
            in_fence = opened.group(1)
            continue
        match = _REF_DEF_RE.match(line)
        if match:
            definitions.setdefault(match.group(1).strip().lower(), match.group(2))
    return definitions


def _scan_line(
    source: str,
    line: str,
    line_no: int,
    definitions: dict[str, str],
    scan: BodyScan,
) -> None:
    if _REF_DEF_RE.match(line):
        return
    masked = _mask_code_spans(line)

    def add(text: str, target: str, image: bool = False) -> None:
        scan.references.append(
            CrossReference(
                source=source,
                text=text.strip(),
                target=target.strip(),
                kind=classify_target(target.strip()),
                line=line_no,
                image=image,
            )
        )

    for match in _IMAGE_RE.finditer(masked):
        add(match.group(1), match.group(2), image=True)
    for match in _LINK_RE.finditer(masked):
        add(match.group(1), match.group(2))

    consumed = _LINK_RE.sub(lambda m: " " * len(m.group(0)), masked)
    consumed = _IMAGE_RE.sub(lambda m: " " * len(m.group(0)), consumed)
    for match in _AUTOLINK_RE.finditer(consumed):
        add(match.group(1), match.group(1))
    for match in _FULL_REF_RE.finditer(consumed):
        text, label = match.group(1), match.group(2)
        key = (label or text).strip().lower()
        target = definitions.get(key)
        if target is None:
            scan.undefined_labels.append((label or text, line_no))
        else:
            add(text, target)
    consumed = _FULL_REF_RE.sub(lambda m: " " * len(m.group(0)), consumed)
    for match in _SHORTCUT_REF_RE.finditer(consumed):
        key = match.group(1).strip().lower()
        if key in definitions:
            add(match.group(1), definitions[key])


def scan_body(source: str, body: str, first_line: int = 1) -> BodyScan:
    scan = BodyScan()
    lines = body.splitlines()
    definitions = _collect_definitions(lines)
    anchor_counts: dict[str, int] = {}
    fence = ""
    fence_lang = ""
    fence_line = 0
    fence_lines: list[str] = []
    for offset, line in enumerate(lines):
        line_no = first_line + offset
        opened = _FENCE_OPEN_RE.match(line)
        if fence:
            if opened and opened.group(1)[0] == fence[0] and len(opened.group(1)) >= len(fence) and not opened.group(2):
                scan.samples.append(CodeSample(source, fence_lang, "\n".join(fence_lines), fence_line, closed=True))
                fence = ""
                fence_lines = []
            else:
                fence_lines.append(line)
            continue
        if opened:
            fence = opened.group(1)
            info = opened.group(2).strip()
            fence_lang = info.split()[0].strip("{}.").lower() if info else ""
            fence_line = line_no
            continue
        heading = _HEADING_RE.match(line)
        if heading:
            text = (heading.group(2) or "").strip()
            base = slugify(text)
            count = anchor_counts.get(base, 0)
            anchor_counts[base] = count + 1
            anchor = base if count == 0 else f"{base}-{count}"
            scan.headings.append(Heading(level=len(heading.group(1)), text=text, line=line_no, anchor=anchor))
        _scan_line(source, line, line_no, definitions, scan)
    if fence:
        scan.samples.append(CodeSample(source, fence_lang, "\n".join(fence_lines), fence_line, closed=False))
    return scan
