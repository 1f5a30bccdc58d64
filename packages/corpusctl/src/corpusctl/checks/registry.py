"""Checks registry accessors."""

from __future__ import annotations

from typing import Iterable

from .domains import register_all
from .model import CheckDef

ALL_CHECKS: tuple[CheckDef, ...] = register_all()


class RegistryError(ValueError):
    pass


def list_checks() -> tuple[CheckDef, ...]:
    return ALL_CHECKS


def list_domains() -> tuple[str, ...]:
    return tuple(sorted({check.domain for check in ALL_CHECKS}))


def get_check(check_id: str) -> CheckDef:
    raw = str(check_id).strip()
    for check in ALL_CHECKS:
        if check.check_id == raw:
            return check
    raise RegistryError(f"unknown check id `{raw}`")


def select_checks(
    ids: Iterable[str] = (),
    domains: Iterable[str] = (),
    tags: Iterable[str] = (),
    disabled: Iterable[str] = (),
) -> tuple[CheckDef, ...]:
    wanted_ids = {str(i).strip() for i in ids if str(i).strip()}
    wanted_domains = {str(d).strip() for d in domains if str(d).strip()}
    wanted_tags = {str(t).strip() for t in tags if str(t).strip()}
    skipped = {str(d).strip() for d in disabled}
    for cid in sorted(wanted_ids):
        get_check(cid)
    unknown_domains = wanted_domains.difference(list_domains())
    if unknown_domains:
        raise RegistryError(f"unknown check domain(s): {', '.join(sorted(unknown_domains))}")
    selected: list[CheckDef] = []
    for check in ALL_CHECKS:
        if check.check_id in skipped and check.check_id not in wanted_ids:
            continue
        if wanted_ids and check.check_id not in wanted_ids:
            continue
        if wanted_domains and check.domain not in wanted_domains:
            continue
        if wanted_tags and not wanted_tags.intersection(check.tags):
            continue
        selected.append(check)
    return tuple(selected)
