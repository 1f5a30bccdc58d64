from __future__ import annotations

from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_ARTIFACT
from .context import RunContext


def ensure_evidence_path(ctx: RunContext, path: Path) -> Path:
    resolved = path.resolve() if path.is_absolute() else (ctx.evidence_root / path).resolve()
    root = ctx.evidence_root.resolve()
    if resolved == root or root in resolved.parents:
        resolved.parent.mkdir(parents=True, exist_ok=True)
        return resolved
    raise ScriptError(f"forbidden write path outside evidence root: {resolved}", ERR_ARTIFACT, kind="forbidden_write_path")


def write_text(ctx: RunContext, path: Path, content: str, encoding: str = "utf-8") -> Path:
    out = ensure_evidence_path(ctx, path)
    out.write_text(content, encoding=encoding)
    return out
