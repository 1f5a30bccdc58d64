from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit, emit_text, write_payload_if_requested
from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..errors import ScriptError
from ..exit_codes import ERR_CHECKS, ERR_USAGE, OK
from ..loader import load_run_corpus
from .model import CheckContext, CheckResult, CheckRunReport, CheckStatus
from .registry import RegistryError, list_checks, select_checks
from .runner import run_checks

_STATUS_LABEL = {
    CheckStatus.PASS: "PASS",
    CheckStatus.FAIL: "FAIL",
    CheckStatus.SKIP: "SKIP",
    CheckStatus.ERROR: "ERROR",
}


def configure_check_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("check", help="run content-integrity checks over the corpus")
    p.add_argument("--select", action="append", default=[], metavar="ID", help="run only this check id (repeatable)")
    p.add_argument("--domain", action="append", default=[], help="run only checks of this domain (repeatable)")
    p.add_argument("--tag", action="append", default=[], help="run only checks carrying this tag (repeatable)")
    p.add_argument("--strict", action="store_true", help="treat warnings as failures")
    p.add_argument("--fail-fast", action="store_true", help="stop after the first failing check")
    p.add_argument("--out-file", help="also write the JSON report under the evidence root")
    p.add_argument("--json", action="store_true", help="emit JSON output")

    list_p = sub.add_parser("checks", help="list registered checks")
    list_p.add_argument("--domain", action="append", default=[], help="filter by domain (repeatable)")
    list_p.add_argument("--json", action="store_true", help="emit JSON output")


def report_payload(ctx: RunContext, report: CheckRunReport, strict: bool = False) -> dict[str, object]:
    payload = build_base_payload(ctx, "corpusctl.check-run.v1", report.status(strict))
    payload.update(
        {
            "root": ctx.root.as_posix(),
            "documents": report.documents,
            "summary": dict(report.summary),
            "checks": [row.to_dict() for row in report.rows],
        }
    )
    return payload


def render_report_text(report: CheckRunReport, strict: bool = False, quiet: bool = False) -> list[str]:
    lines = [f"corpusctl check: {report.status(strict)} ({report.documents} documents, {report.summary['total']} checks)"]
    for row in report.rows:
        if quiet and row.status in {CheckStatus.PASS, CheckStatus.SKIP} and not row.violations:
            continue
        label = _STATUS_LABEL[row.status]
        if row.status == CheckStatus.PASS and row.warnings:
            label = "WARN"
        lines.append(f"{label} {row.id}: {row.title}")
        if row.error:
            lines.append(f"  - check raised {row.error}")
        for violation in row.violations:
            lines.append(f"  - {violation.render()}")
        if row.violations and row.fix_hint:
            lines.append(f"  hint: {row.fix_hint}")
    summary = report.summary
    lines.append(
        "summary: "
        + " ".join(f"{key}={summary[key]}" for key in ("passed", "failed", "skipped", "errors", "violations", "warnings"))
    )
    return lines


def _on_result(ctx: RunContext):
    def _log(result: CheckResult) -> None:
        level = "debug" if result.status in {CheckStatus.PASS, CheckStatus.SKIP} else "warn"
        log_event(ctx, level, "checks", "result", check=result.id, status=result.status.value, violations=len(result.violations))

    return _log


def run_check_command(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    if ns.cmd == "checks":
        return _run_list_command(ctx, ns, as_json)
    try:
        selected = select_checks(ns.select, ns.domain, ns.tag, disabled=ctx.config.disabled_checks)
    except RegistryError as exc:
        raise ScriptError(str(exc), ERR_USAGE, kind="unknown_check") from exc
    if not selected:
        raise ScriptError("no checks selected", ERR_USAGE, kind="empty_selection")
    corpus = load_run_corpus(ctx)
    check_ctx = CheckContext(corpus=corpus, root=ctx.root, config=ctx.config, network=not ctx.no_network)
    report = run_checks(selected, check_ctx, fail_fast=ns.fail_fast, on_result=_on_result(ctx))
    payload = report_payload(ctx, report, ns.strict)
    written = write_payload_if_requested(ctx, ns.out_file, dumps_json(payload, pretty=True))
    if written is not None:
        log_event(ctx, "info", "checks", "report_written", path=written.as_posix())
    if as_json:
        emit(payload, as_json=True)
    else:
        emit_text(render_report_text(report, ns.strict, ctx.quiet))
    log_event(ctx, "info", "checks", "done", status=payload["status"], **dict(report.summary))
    return ERR_CHECKS if report.failed(ns.strict) else OK


def _run_list_command(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    domains = set(ns.domain)
    rows = [check for check in list_checks() if not domains or check.domain in domains]
    if as_json:
        payload = build_base_payload(ctx, "corpusctl.checks.v1")
        payload["checks"] = [
            {
                "id": check.check_id,
                "domain": check.domain,
                "description": check.description,
                "severity": check.severity.value,
                "tags": list(check.tags),
                "network": check.network,
                "enabled": check.check_id not in ctx.config.disabled_checks,
                "fix_hint": check.fix_hint,
            }
            for check in rows
        ]
        emit(payload, as_json=True)
        return OK
    lines = []
    for check in rows:
        flags = [check.severity.value]
        if check.network:
            flags.append("network")
        if check.check_id in ctx.config.disabled_checks:
            flags.append("disabled")
        lines.append(f"{check.check_id} [{', '.join(flags)}] {check.description}")
    emit_text(lines)
    return OK
