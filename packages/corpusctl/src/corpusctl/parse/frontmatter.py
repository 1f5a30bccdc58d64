"""YAML metadata header handling.

A header is a block at the very top of the file opened by a `---` line and
closed by a `---` or `...` line. Dates stay plain strings so that
`parse_date` sees the value as written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

_OPEN = "---"
_CLOSE = {"---", "..."}
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class HeaderLoader(yaml.SafeLoader):
    pass


HeaderLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class Header:
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    body_line: int = 1
    present: bool = False
    errors: tuple[str, ...] = ()


def split_header(text: str) -> Header:
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _OPEN:
        return Header(body=text)
    for idx in range(1, len(lines)):
        if lines[idx].rstrip() in _CLOSE:
            raw = "".join(lines[1:idx])
            body = "".join(lines[idx + 1 :])
            body_line = idx + 2
            return _load(raw, body, body_line)
    return Header(body=text, present=True, errors=("unterminated metadata header",))


def _load(raw: str, body: str, body_line: int) -> Header:
    try:
        data = yaml.load(raw, Loader=HeaderLoader) if raw.strip() else {}
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        where = f" at header line {mark.line + 2}" if mark is not None else ""
        problem = getattr(exc, "problem", None) or str(exc)
        return Header(body=body, body_line=body_line, present=True, errors=(f"invalid YAML header{where}: {problem}",))
    except ValueError as exc:
        # explicit `!!timestamp` tags still go through the date constructor
        return Header(body=body, body_line=body_line, present=True, errors=(f"invalid YAML header: {exc}",))
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return Header(body=body, body_line=body_line, present=True, errors=("metadata header must be a mapping",))
    return Header(metadata={str(k): v for k, v in data.items()}, body=body, body_line=body_line, present=True)
