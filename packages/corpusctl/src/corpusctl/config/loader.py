"""Corpus configuration loading.

Configuration lives in `corpusctl.yaml` at the corpus root. Every key is
optional; missing keys fall back to `DEFAULT_CONFIG`. The file is validated
against the `corpusctl.config.v1` schema before use.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from ..contracts.schema.validate import validation_errors
from ..errors import ConfigError

CONFIG_FILENAME = "corpusctl.yaml"


@dataclass(frozen=True)
class CorpusConfig:
    suffixes: tuple[str, ...] = (".md",)
    exclude: tuple[str, ...] = ()
    index_pages: tuple[str, ...] = ("index.md", "toc.md", "README.md")
    required_fields: tuple[str, ...] = ()
    title_fields: tuple[str, ...] = ("title",)
    date_fields: tuple[str, ...] = ("date", "ms.date")
    keyword_fields: tuple[str, ...] = ("keywords", "f1_keywords", "helpviewer_keywords")
    date_formats: tuple[str, ...] = ("%Y-%m-%d", "%m/%d/%Y")
    external_allowlist: tuple[str, ...] = ()
    disabled_checks: tuple[str, ...] = ()
    external_timeout_s: float = 10.0
    allow_future_dates: bool = False
    source: str = ""

    def is_index_page(self, path: str) -> bool:
        name = path.rsplit("/", 1)[-1]
        return path in self.index_pages or name in self.index_pages


DEFAULT_CONFIG = CorpusConfig()

_TUPLE_FIELDS = {f.name for f in fields(CorpusConfig) if f.name not in {"external_timeout_s", "allow_future_dates", "source"}}


def config_from_mapping(data: dict[str, Any], source: str = "") -> CorpusConfig:
    errors = validation_errors("corpusctl.config.v1", data)
    if errors:
        where = source or "config"
        raise ConfigError(f"invalid config {where}: " + "; ".join(errors))
    updates: dict[str, Any] = {}
    for key, value in data.items():
        if key == "schema_version":
            continue
        if key in _TUPLE_FIELDS:
            updates[key] = tuple(str(item) for item in value)
        elif key == "external_timeout_s":
            updates[key] = float(value)
        else:
            updates[key] = value
    return replace(DEFAULT_CONFIG, source=source, **updates)


def load_config(root: Path, explicit: Path | None = None) -> CorpusConfig:
    if explicit is None:
        path = root / CONFIG_FILENAME
        if not path.is_file():
            return DEFAULT_CONFIG
    else:
        path = explicit if explicit.is_absolute() or explicit.exists() else root / explicit
        if not path.is_file():
            raise ConfigError(f"config file not found: {explicit}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"unable to read {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"unable to parse {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: root must be mapping")
    return config_from_mapping(data, source=path.as_posix())
