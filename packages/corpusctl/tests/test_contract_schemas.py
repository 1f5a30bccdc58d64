from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from corpusctl.checks import run_checks, select_checks
from corpusctl.checks.command import report_payload
from corpusctl.checks.model import CheckContext
from corpusctl.cli.output import build_base_payload, render_error
from corpusctl.contracts.schema.catalog import SCHEMAS_DIR, list_schemas, schema_path_for
from corpusctl.contracts.schema.validate import validate, validate_file, validation_errors
from corpusctl.core.context import RunContext
from corpusctl.errors import ScriptError
from corpusctl.exit_codes import ERR_VALIDATION
from corpusctl.gen import inventory_rows
from corpusctl.index import build_graph, build_keyword_index
from corpusctl.loader import load_corpus
from helpers import SRC


@pytest.fixture
def run_ctx(fixture_corpus: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RunContext:
    monkeypatch.delenv("CORPUSCTL_NETWORK", raising=False)
    return RunContext.from_args(root=str(fixture_corpus), run_id="contract-test", evidence_root=str(tmp_path / "evidence"))


@pytest.mark.unit
def test_every_schema_file_is_named_after_its_id() -> None:
    names = list_schemas()
    assert "corpusctl.check-run.v1" in names
    for name in names:
        schema = json.loads(schema_path_for(name).read_text(encoding="utf-8"))
        assert schema["$id"] == name
    assert all(path.name.endswith(".schema.json") for path in SCHEMAS_DIR.iterdir())


@pytest.mark.unit
def test_unknown_schema_is_a_validation_error() -> None:
    with pytest.raises(ScriptError) as excinfo:
        schema_path_for("corpusctl.nope.v1")
    assert excinfo.value.code == ERR_VALIDATION


@pytest.mark.unit
def test_check_run_payload_validates(run_ctx: RunContext) -> None:
    corpus = load_corpus(run_ctx.root, run_ctx.config)
    report = run_checks(select_checks(), CheckContext(corpus=corpus, root=run_ctx.root, config=run_ctx.config))
    payload = report_payload(run_ctx, report)
    validate("corpusctl.check-run.v1", payload)
    assert payload["status"] == "ok"
    assert payload["run_id"] == "contract-test"


@pytest.mark.unit
def test_derived_view_payloads_validate(run_ctx: RunContext) -> None:
    corpus = load_corpus(run_ctx.root, run_ctx.config)

    inventory = build_base_payload(run_ctx, "corpusctl.inventory.v1")
    inventory.update({"count": len(corpus), "documents": inventory_rows(corpus)})
    validate("corpusctl.inventory.v1", inventory)

    index = build_keyword_index(corpus)
    index_payload = build_base_payload(run_ctx, "corpusctl.index.v1")
    index_payload.update({"count": len(index.entries), "keywords": index.to_dict()})
    validate("corpusctl.index.v1", index_payload)

    graph = build_graph(corpus)
    graph_payload = build_base_payload(run_ctx, "corpusctl.graph.v1")
    graph_payload.update({"nodes": [graph.node(p) for p in corpus.paths()], "orphans": [], "dangling": []})
    validate("corpusctl.graph.v1", graph_payload)

    doc_payload = build_base_payload(run_ctx, "corpusctl.document.v1")
    doc_payload["document"] = corpus.get("tutorials/pattern-matching.md").to_dict()  # type: ignore[union-attr]
    validate("corpusctl.document.v1", doc_payload)

    checked = build_base_payload(run_ctx, "corpusctl.validate-output.v1")
    checked.update({"schema": "corpusctl.document.v1", "file": "document.json"})
    validate("corpusctl.validate-output.v1", checked)


@pytest.mark.unit
def test_error_payload_validates() -> None:
    payload = json.loads(render_error(as_json=True, message="boom", code=12, kind="forbidden_write_path"))
    assert validation_errors("corpusctl.error.v1", payload) == []
    assert render_error(as_json=False, message="boom", code=12) == "boom"


@pytest.mark.unit
def test_validation_errors_point_at_the_field() -> None:
    errors = validation_errors("corpusctl.search.v1", {"schema_name": "corpusctl.search.v1", "results": [{"path": 1}]})
    assert any(err.startswith("results/0/path:") for err in errors)
    assert any(err.startswith("<root>:") for err in errors)


@pytest.mark.unit
def test_validate_file_rejects_unreadable_json(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ScriptError, match="unable to read JSON payload"):
        validate_file("corpusctl.error.v1", bad)


@pytest.mark.unit
def test_emitted_schema_names_are_bundled() -> None:
    pattern = re.compile(r"\"(corpusctl\.[a-z-]+\.v\d+)\"")
    emitted: set[str] = set()
    for path in sorted((SRC / "corpusctl").rglob("*.py")):
        emitted.update(pattern.findall(path.read_text(encoding="utf-8")))
    assert "corpusctl.validate-output.v1" in emitted
    assert sorted(emitted.difference(list_schemas())) == []
