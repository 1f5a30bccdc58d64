"""CLI payload output helpers."""

from __future__ import annotations

import sys
from pathlib import Path

from ..core.context import RunContext
from ..core.fs import write_text
from ..core.serialize import dumps_json

TOOL = "corpusctl"


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def emit_text(lines: list[str]) -> None:
    sys.stdout.write("\n".join(lines) + ("\n" if lines else ""))


def build_base_payload(ctx: RunContext, schema_name: str, status: str = "ok") -> dict[str, object]:
    return {
        "schema_name": schema_name,
        "schema_version": 1,
        "tool": TOOL,
        "status": status,
        "run_id": ctx.run_id,
    }


def resolve_output_format(*, cli_json: bool, cli_format: str | None, ci_present: bool) -> str:
    if cli_json:
        return "json"
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "") -> str:
    if as_json:
        error: dict[str, object] = {"code": code, "message": message}
        if kind:
            error["kind"] = kind
        return dumps_json(
            {
                "schema_name": "corpusctl.error.v1",
                "schema_version": 1,
                "tool": TOOL,
                "status": "error",
                "errors": [error],
            },
            pretty=False,
        )
    return message


def write_payload_if_requested(ctx: RunContext, out_file: str | None, payload: str) -> Path | None:
    if not out_file:
        return None
    return write_text(ctx, Path(out_file), payload + "\n")
