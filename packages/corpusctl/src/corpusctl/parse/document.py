from __future__ import annotations

from typing import Any, Iterable

from ..config import DEFAULT_CONFIG, CorpusConfig
from ..model.document import Document
from .dates import parse_date
from .frontmatter import split_header
from .markdown import scan_body


def _first_present(metadata: dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = metadata.get(key)
        if value not in (None, ""):
            return value
    return None


def _keywords(metadata: dict[str, Any], keys: Iterable[str]) -> list[str]:
    out: list[str] = []
    for key in keys:
        value = metadata.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            out.extend(part.strip() for part in value.split(","))
        elif isinstance(value, (list, tuple)):
            out.extend(str(item).strip() for item in value if isinstance(item, (str, int, float)))
        elif isinstance(value, (int, float)):
            out.append(str(value))
    return [kw for kw in out if kw]


def parse_document(path: str, text: str, config: CorpusConfig = DEFAULT_CONFIG) -> Document:
    header = split_header(text)
    metadata = header.metadata
    title = _first_present(metadata, config.title_fields)
    raw_date = _first_present(metadata, config.date_fields)
    scan = scan_body(path, header.body, header.body_line)
    return Document(
        path=path,
        title="" if title is None or isinstance(title, (dict, list)) else str(title),
        date=parse_date(raw_date, config.date_formats) if raw_date is not None else None,
        raw_date="" if raw_date is None else str(raw_date),
        keywords=tuple(_keywords(metadata, config.keyword_fields)),
        metadata=metadata,
        body=header.body,
        has_header=header.present,
        headings=tuple(scan.headings),
        references=tuple(scan.references),
        samples=tuple(scan.samples),
        header_errors=header.errors,
        undefined_labels=tuple(scan.undefined_labels),
    )
