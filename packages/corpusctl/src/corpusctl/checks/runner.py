from __future__ import annotations

import time
from typing import Callable, Iterable

from .model import CheckContext, CheckDef, CheckResult, CheckRunReport, CheckStatus, Severity, Violation

ProgressFn = Callable[[CheckResult], None]


def _normalize(check: CheckDef, violations: Iterable[Violation]) -> tuple[Violation, ...]:
    out: list[Violation] = []
    for item in violations:
        severity = item.severity
        if check.severity == Severity.WARN and severity == Severity.ERROR:
            severity = Severity.WARN
        out.append(
            Violation(
                code=item.code,
                message=item.message,
                path=item.path,
                line=item.line,
                severity=severity,
                hint=item.hint or check.fix_hint,
            )
        )
    return tuple(sorted(out, key=lambda v: v.canonical_key))


def run_check(check: CheckDef, ctx: CheckContext) -> CheckResult:
    if check.network and not ctx.network:
        return CheckResult(
            id=check.check_id,
            domain=check.domain,
            title=check.description,
            status=CheckStatus.SKIP,
            severity=check.severity,
            fix_hint=check.fix_hint,
        )
    start = time.monotonic()
    try:
        violations = _normalize(check, check.fn(ctx))
    except Exception as exc:  # noqa: BLE001
        return CheckResult(
            id=check.check_id,
            domain=check.domain,
            title=check.description,
            status=CheckStatus.ERROR,
            severity=check.severity,
            duration_ms=int((time.monotonic() - start) * 1000),
            fix_hint=check.fix_hint,
            error=f"{type(exc).__name__}: {exc}",
        )
    duration_ms = int((time.monotonic() - start) * 1000)
    has_error = any(v.severity == Severity.ERROR for v in violations)
    return CheckResult(
        id=check.check_id,
        domain=check.domain,
        title=check.description,
        status=CheckStatus.FAIL if has_error else CheckStatus.PASS,
        severity=check.severity,
        violations=violations,
        duration_ms=duration_ms,
        fix_hint=check.fix_hint,
    )


def run_checks(
    checks: Iterable[CheckDef],
    ctx: CheckContext,
    *,
    fail_fast: bool = False,
    on_result: ProgressFn | None = None,
) -> CheckRunReport:
    rows: list[CheckResult] = []
    for check in checks:
        result = run_check(check, ctx)
        rows.append(result)
        if on_result is not None:
            on_result(result)
        if fail_fast and result.status in {CheckStatus.FAIL, CheckStatus.ERROR}:
            break
    return CheckRunReport(rows=tuple(rows), documents=len(ctx.corpus))
