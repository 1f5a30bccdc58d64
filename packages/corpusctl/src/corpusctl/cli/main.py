from __future__ import annotations

import argparse
import platform
import sys

from .. import __version__
from ..checks.command import configure_check_parser, run_check_command
from ..contracts.schema.catalog import list_schemas
from ..contracts.schema.validate import validate_file
from ..core.context import RunContext
from ..core.env import getenv
from ..core.logging import log_event
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_USAGE, OK
from ..gen.command import configure_gen_parser, run_gen_command
from ..index.command import configure_index_parser, run_index_command
from .output import build_base_payload, emit, emit_text, render_error, resolve_output_format

CHECK_COMMANDS = {"check", "checks"}
INDEX_COMMANDS = {"index", "search", "graph", "show"}
GEN_COMMANDS = {"inventory", "samples"}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="corpusctl", description="Documentation corpus model and linter.")
    p.add_argument("--version", action="version", version=f"corpusctl {__version__}")
    p.add_argument("--root", help="corpus root directory (default: nearest corpusctl.yaml or cwd)")
    p.add_argument("--config", help="explicit corpusctl.yaml path")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--run-id", help="run identifier for reports")
    p.add_argument("--evidence-root", help="root directory for written reports and artifacts")
    p.add_argument("--network", choices=["allow", "forbid"], default=None, help="network access mode for external link probes")
    p.add_argument("--log-json", action="store_true", help="emit structured JSON log lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print versions")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    configure_check_parser(sub)
    configure_index_parser(sub)
    configure_gen_parser(sub)

    val_p = sub.add_parser("validate-output", help="validate a JSON payload against a bundled schema")
    val_p.add_argument("--schema", required=True, help=f"schema name, one of: {', '.join(list_schemas())}")
    val_p.add_argument("--file", required=True)
    val_p.add_argument("--json", action="store_true", help="emit JSON output")
    return p


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    p = build_parser()
    ns = p.parse_args(raw_argv)
    cli_json = "--json" in raw_argv
    if ns.format and cli_json and ns.format != "json":
        print("conflicting output flags: use either --format json or --json", file=sys.stderr)
        return ERR_USAGE
    fmt = resolve_output_format(cli_json=cli_json, cli_format=ns.format, ci_present=bool(getenv("CI")))
    as_json = fmt == "json"
    try:
        ctx = RunContext.from_args(
            root=ns.root,
            config_path=ns.config,
            run_id=ns.run_id,
            evidence_root=ns.evidence_root,
            output_format=fmt,  # type: ignore[arg-type]
            network_mode=ns.network,
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
        )
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    try:
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=fmt, network=ctx.network_mode)
        if ns.cmd == "version":
            payload = build_base_payload(ctx, "corpusctl.version.v1")
            payload["corpusctl_version"] = __version__
            payload["python_version"] = platform.python_version()
            if as_json:
                emit(payload, as_json=True)
            else:
                emit_text([f"corpusctl {__version__} (python {platform.python_version()})"])
            return OK
        if ns.cmd in CHECK_COMMANDS:
            return run_check_command(ctx, ns, as_json)
        if ns.cmd in INDEX_COMMANDS:
            return run_index_command(ctx, ns, as_json)
        if ns.cmd in GEN_COMMANDS:
            return run_gen_command(ctx, ns, as_json)
        if ns.cmd == "validate-output":
            validate_file(ns.schema, ns.file)
            if as_json:
                payload = build_base_payload(ctx, "corpusctl.validate-output.v1")
                payload["schema"] = ns.schema
                payload["file"] = ns.file
                emit(payload, as_json=True)
            else:
                emit_text([f"{ns.file}: valid {ns.schema}"])
            return OK
        return ERR_USAGE
    except ScriptError as exc:
        log_event(ctx, "error", "cli", "failed", cmd=ns.cmd, kind=exc.kind, code=exc.code)
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:
        log_event(ctx, "error", "cli", "crashed", cmd=ns.cmd, error=type(exc).__name__)
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL, kind="internal_error"), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
