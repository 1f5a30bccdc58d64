from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ...errors import ScriptError
from ...exit_codes import ERR_VALIDATION
from .catalog import schema_path_for


@lru_cache(maxsize=None)
def _load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads(schema_path_for(schema_name).read_text(encoding="utf-8"))


def validation_errors(schema_name: str, payload: Any) -> list[str]:
    validator = jsonschema.Draft202012Validator(_load_schema(schema_name))
    errors: list[str] = []
    for exc in sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path)):
        pointer = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        errors.append(f"{pointer}: {exc.message}")
    return errors


def validate(schema_name: str, payload: Any) -> None:
    try:
        jsonschema.validate(payload, _load_schema(schema_name), cls=jsonschema.Draft202012Validator)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(f"schema validation failed for {schema_name} at {loc}: {exc.message}", ERR_VALIDATION) from exc


def validate_file(schema_name: str, file_path: str | Path) -> None:
    try:
        payload = json.loads(Path(file_path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ScriptError(f"unable to read JSON payload {file_path}: {exc}", ERR_VALIDATION) from exc
    validate(schema_name, payload)
