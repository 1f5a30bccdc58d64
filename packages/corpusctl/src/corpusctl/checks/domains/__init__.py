from __future__ import annotations

from ..model import CheckDef
from . import layout, links, metadata, samples


def register_all() -> tuple[CheckDef, ...]:
    checks = (
        *layout.register(),
        *links.register(),
        *metadata.register(),
        *samples.register(),
    )
    by_id: dict[str, CheckDef] = {}
    for check in checks:
        if check.check_id in by_id:
            raise ValueError(f"duplicate check id: {check.check_id}")
        by_id[check.check_id] = check
    return tuple(sorted(by_id.values(), key=lambda check: check.check_id))


__all__ = ["register_all"]
