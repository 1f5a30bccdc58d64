from __future__ import annotations

from pathlib import Path

from ...errors import ScriptError
from ...exit_codes import ERR_VALIDATION

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"


def list_schemas() -> list[str]:
    return sorted(p.name.removesuffix(".schema.json") for p in SCHEMAS_DIR.glob("*.schema.json"))


def schema_path_for(schema_name: str) -> Path:
    path = SCHEMAS_DIR / f"{schema_name}.schema.json"
    if not path.is_file():
        raise ScriptError(f"unknown schema `{schema_name}`; known: {', '.join(list_schemas())}", ERR_VALIDATION)
    return path
