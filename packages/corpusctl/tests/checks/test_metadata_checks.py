from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

from corpusctl.checks.domains.metadata import (
    check_date_valid,
    check_header_present,
    check_keywords_present,
    check_required_fields,
    check_title_present,
)
from corpusctl.checks.model import Severity
from corpusctl.config import CorpusConfig
from helpers import check_context, doc


def _codes(violations) -> list[tuple[str, str]]:
    return sorted((v.code, v.path) for v in violations)


def test_header_present_flags_missing_and_broken_headers(corpus_root: Path) -> None:
    ctx = check_context(
        corpus_root,
        {
            "ok.md": doc(),
            "bare.md": "# No header\n",
            "broken.md": "---\ntitle: [oops\n---\n# Body\n",
        },
    )
    assert _codes(check_header_present(ctx)) == [
        ("METADATA_HEADER_INVALID", "broken.md"),
        ("METADATA_HEADER_MISSING", "bare.md"),
    ]


def test_title_present(corpus_root: Path) -> None:
    ctx = check_context(corpus_root, {"ok.md": doc(), "blank.md": doc(title=""), "spaces.md": '---\ntitle: "   "\n---\n'})
    assert _codes(check_title_present(ctx)) == [
        ("METADATA_TITLE_MISSING", "blank.md"),
        ("METADATA_TITLE_MISSING", "spaces.md"),
    ]


def test_date_valid_reports_missing_invalid_and_future(corpus_root: Path) -> None:
    future = (date.today() + timedelta(days=400)).strftime("%m/%d/%Y")
    ctx = check_context(
        corpus_root,
        {
            "ok.md": doc(date="07/20/2015"),
            "iso.md": '---\ntitle: "Iso"\ndate: 2020-02-29\n---\n',
            "none.md": doc(date=""),
            "bad.md": doc(date="31/12/2015"),
            "future.md": doc(date=future),
        },
    )
    assert _codes(check_date_valid(ctx)) == [
        ("METADATA_DATE_FUTURE", "future.md"),
        ("METADATA_DATE_INVALID", "bad.md"),
        ("METADATA_DATE_MISSING", "none.md"),
    ]


def test_date_valid_allows_future_when_configured(corpus_root: Path) -> None:
    future = (date.today() + timedelta(days=400)).strftime("%m/%d/%Y")
    ctx = check_context(corpus_root, {"future.md": doc(date=future)}, CorpusConfig(allow_future_dates=True))
    assert check_date_valid(ctx) == []


def test_keywords_present_is_a_warning(corpus_root: Path) -> None:
    ctx = check_context(corpus_root, {"ok.md": doc(), "none.md": doc(keywords=())})
    violations = check_keywords_present(ctx)
    assert _codes(violations) == [("METADATA_KEYWORDS_MISSING", "none.md")]
    assert violations[0].severity == Severity.WARN


def test_required_fields_uses_config(corpus_root: Path) -> None:
    files = {"a.md": doc(), "b.md": '---\ntitle: "B"\nauthor: docs-team\nms.topic: error-reference\n---\n'}
    config = CorpusConfig(required_fields=("author", "ms.topic"))
    ctx = check_context(corpus_root, files, config)
    assert sorted((v.path, v.message) for v in check_required_fields(ctx)) == [
        ("a.md", "missing required header field `author`"),
        ("a.md", "missing required header field `ms.topic`"),
    ]


def test_date_valid_reports_impossible_unquoted_dates(corpus_root: Path) -> None:
    files = {
        "feb.md": '---\ntitle: "Feb"\ndate: 2023-02-30\n---\n',
        "month.md": '---\ntitle: "Month"\ndate: 2023-13-45\n---\n',
        "ok.md": '---\ntitle: "Ok"\ndate: 2020-02-29\n---\n',
    }
    ctx = check_context(corpus_root, files)
    assert len(ctx.corpus) == 3
    violations = check_date_valid(ctx)
    assert _codes(violations) == [
        ("METADATA_DATE_INVALID", "feb.md"),
        ("METADATA_DATE_INVALID", "month.md"),
    ]
    assert "`2023-02-30`" in violations[0].message
