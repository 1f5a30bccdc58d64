from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING

from .clock import utc_now_iso

if TYPE_CHECKING:
    from .context import RunContext

_LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _enabled(ctx: RunContext, level: str) -> bool:
    if ctx.quiet:
        return _LEVELS.get(level, 20) >= _LEVELS["warn"]
    if ctx.verbose:
        return True
    return _LEVELS.get(level, 20) >= _LEVELS["info"]


def log_event(ctx: RunContext, level: str, component: str, action: str, **fields: object) -> None:
    if not _enabled(ctx, level):
        return
    payload = {
        "ts": utc_now_iso(),
        "level": level,
        "run_id": ctx.run_id,
        "component": component,
        "action": action,
        **fields,
    }
    if ctx.log_json:
        sys.stderr.write(json.dumps(payload, sort_keys=True, default=str) + "\n")
        return
    core = f"ts={payload['ts']} level={level} run_id={ctx.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")
