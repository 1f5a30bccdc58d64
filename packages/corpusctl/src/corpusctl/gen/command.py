from __future__ import annotations

import argparse
from pathlib import Path

from ..cli.output import build_base_payload, emit, emit_text, write_payload_if_requested
from ..core.context import RunContext
from ..core.fs import ensure_evidence_path
from ..core.logging import log_event
from ..core.serialize import dumps_json
from ..exit_codes import OK
from ..loader import load_run_corpus
from .inventory import inventory_rows, render_inventory_markdown
from .samples import extract_samples


def configure_gen_parser(sub: argparse._SubParsersAction) -> None:
    inv_p = sub.add_parser("inventory", help="list documents with their metadata summary")
    inv_p.add_argument("--markdown", action="store_true", help="render a Markdown table instead of text")
    inv_p.add_argument("--out-file", help="also write the inventory under the evidence root")
    inv_p.add_argument("--json", action="store_true", help="emit JSON output")

    samples_p = sub.add_parser("samples", help="extract code samples into files")
    samples_p.add_argument("--out", default="samples", help="output directory under the evidence root")
    samples_p.add_argument("--language", action="append", default=[], help="only extract this language (repeatable)")
    samples_p.add_argument("--json", action="store_true", help="emit JSON output")


def run_gen_command(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    corpus = load_run_corpus(ctx)
    if ns.cmd == "inventory":
        rows = inventory_rows(corpus)
        payload = build_base_payload(ctx, "corpusctl.inventory.v1")
        payload["root"] = ctx.root.as_posix()
        payload["count"] = len(rows)
        payload["documents"] = rows
        rendered = render_inventory_markdown(rows)
        if ns.out_file:
            body = rendered.rstrip("\n") if ns.markdown else dumps_json(payload, pretty=True)
            out = write_payload_if_requested(ctx, ns.out_file, body)
            log_event(ctx, "info", "gen", "inventory_written", path=out.as_posix() if out else "")
        if as_json:
            emit(payload, as_json=True)
        elif ns.markdown:
            emit_text(rendered.rstrip("\n").splitlines())
        else:
            emit_text([f"{row['path']}\t{row['date'] or '-'}\t{row['title'] or '-'}" for row in rows])
        return OK
    out_dir = ensure_evidence_path(ctx, Path(ns.out) / "manifest.json").parent
    records = extract_samples(corpus, out_dir, tuple(ns.language))
    log_event(ctx, "info", "gen", "samples_written", out_dir=out_dir.as_posix(), count=len(records))
    if as_json:
        payload = build_base_payload(ctx, "corpusctl.samples.v1")
        payload["out_dir"] = out_dir.as_posix()
        payload["samples"] = [r.to_dict() for r in records]
        emit(payload, as_json=True)
    else:
        emit_text([f"extracted {len(records)} code sample(s) to {out_dir.as_posix()}"])
    return OK
