from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit, emit_text, write_payload_if_requested
from ..core.context import RunContext
from ..core.serialize import dumps_json
from ..errors import ScriptError
from ..exit_codes import ERR_USAGE, OK
from ..loader import load_run_corpus
from ..model import normalize_corpus_path
from .graph import build_graph
from .keywords import build_keyword_index


def configure_index_parser(sub: argparse._SubParsersAction) -> None:
    index_p = sub.add_parser("index", help="print the keyword index")
    index_p.add_argument("--out-file", help="also write the JSON index under the evidence root")
    index_p.add_argument("--json", action="store_true", help="emit JSON output")

    search_p = sub.add_parser("search", help="find documents by keyword tag or title")
    search_p.add_argument("query")
    search_p.add_argument("--json", action="store_true", help="emit JSON output")

    graph_p = sub.add_parser("graph", help="print the cross-reference graph")
    graph_p.add_argument("--path", help="limit output to one document")
    graph_p.add_argument("--json", action="store_true", help="emit JSON output")

    show_p = sub.add_parser("show", help="print the parsed model of one document")
    show_p.add_argument("path")
    show_p.add_argument("--json", action="store_true", help="emit JSON output")


def run_index_command(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    corpus = load_run_corpus(ctx)
    if ns.cmd == "index":
        index = build_keyword_index(corpus)
        payload = build_base_payload(ctx, "corpusctl.index.v1")
        payload["keywords"] = index.to_dict()
        payload["count"] = len(index.entries)
        write_payload_if_requested(ctx, ns.out_file, dumps_json(payload, pretty=True))
        if as_json:
            emit(payload, as_json=True)
        else:
            emit_text([f"{kw}: {', '.join(paths)}" for kw, paths in index.to_dict().items()])
        return OK
    if ns.cmd == "search":
        hits = build_keyword_index(corpus).search(ns.query)
        if as_json:
            payload = build_base_payload(ctx, "corpusctl.search.v1")
            payload["query"] = ns.query
            payload["results"] = [hit.to_dict() for hit in hits]
            emit(payload, as_json=True)
        else:
            emit_text([f"{hit.path}\t{hit.title}\t({hit.match})" for hit in hits] or [f"no documents match `{ns.query}`"])
        return OK
    if ns.cmd == "graph":
        graph = build_graph(corpus)
        if ns.path:
            path = normalize_corpus_path(ns.path)
            if path is None or path not in corpus:
                raise ScriptError(f"unknown document: {ns.path}", ERR_USAGE, kind="unknown_document")
            nodes = [graph.node(path)]
            dangling = [d for d in graph.dangling if d.source == path]
        else:
            nodes = [graph.node(p) for p in corpus.paths()]
            dangling = list(graph.dangling)
        if as_json:
            payload = build_base_payload(ctx, "corpusctl.graph.v1")
            payload["nodes"] = nodes
            payload["orphans"] = graph.orphans(ctx.config)
            payload["dangling"] = [d.to_dict() for d in dangling]
            emit(payload, as_json=True)
            return OK
        lines: list[str] = []
        for node in nodes:
            lines.append(str(node["path"]))
            lines.extend(f"  -> {target}" for target in node["outbound"])  # type: ignore[union-attr]
            lines.extend(f"  <- {source}" for source in node["inbound"])  # type: ignore[union-attr]
        lines.extend(f"dangling: {d.source}:{d.line} -> {d.target}" for d in dangling)
        emit_text(lines)
        return OK
    path = normalize_corpus_path(ns.path)
    doc = corpus.get(path) if path else None
    if doc is None:
        raise ScriptError(f"unknown document: {ns.path}", ERR_USAGE, kind="unknown_document")
    if as_json:
        payload = build_base_payload(ctx, "corpusctl.document.v1")
        payload["document"] = doc.to_dict()
        emit(payload, as_json=True)
        return OK
    emit_text(
        [
            f"path: {doc.path}",
            f"title: {doc.title or '-'}",
            f"date: {doc.date.isoformat() if doc.date else (doc.raw_date or '-')}",
            f"keywords: {', '.join(doc.keywords) or '-'}",
            f"headings: {len(doc.headings)}",
            f"references: {len(doc.references)}",
            f"samples: {len(doc.samples)}",
            *(f"header error: {err}" for err in doc.header_errors),
        ]
    )
    return OK
