from __future__ import annotations

from ...core.clock import utc_today
from ..model import CheckContext, CheckDef, Severity, Violation


def check_header_present(ctx: CheckContext) -> list[Violation]:
    out: list[Violation] = []
    for doc in ctx.corpus:
        if not doc.has_header:
            out.append(Violation("METADATA_HEADER_MISSING", "missing metadata header", doc.path, 1))
            continue
        for err in doc.header_errors:
            out.append(Violation("METADATA_HEADER_INVALID", err, doc.path, 1))
    return out


def check_title_present(ctx: CheckContext) -> list[Violation]:
    fields = "/".join(ctx.config.title_fields)
    return [
        Violation("METADATA_TITLE_MISSING", f"empty or missing title ({fields})", doc.path, 1)
        for doc in ctx.corpus
        if not doc.title
    ]


def check_date_valid(ctx: CheckContext) -> list[Violation]:
    out: list[Violation] = []
    today = utc_today()
    fields = "/".join(ctx.config.date_fields)
    formats = ", ".join(f"`{fmt}`" for fmt in ctx.config.date_formats)
    for doc in ctx.corpus:
        if not doc.raw_date:
            out.append(Violation("METADATA_DATE_MISSING", f"missing publication date ({fields})", doc.path, 1))
        elif doc.date is None:
            out.append(Violation("METADATA_DATE_INVALID", f"unparseable date `{doc.raw_date}`; expected one of {formats}", doc.path, 1))
        elif doc.date > today and not ctx.config.allow_future_dates:
            out.append(Violation("METADATA_DATE_FUTURE", f"date {doc.date.isoformat()} is in the future", doc.path, 1))
    return out


def check_keywords_present(ctx: CheckContext) -> list[Violation]:
    fields = "/".join(ctx.config.keyword_fields) or "keywords"
    return [
        Violation("METADATA_KEYWORDS_MISSING", f"no keyword tags ({fields})", doc.path, 1, Severity.WARN)
        for doc in ctx.corpus
        if not doc.keywords
    ]


def check_required_fields(ctx: CheckContext) -> list[Violation]:
    out: list[Violation] = []
    for doc in ctx.corpus:
        for name in ctx.config.required_fields:
            if doc.metadata.get(name) in (None, "", [], {}):
                out.append(Violation("METADATA_FIELD_MISSING", f"missing required header field `{name}`", doc.path, 1))
    return out


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("metadata.header_present", "metadata", "require a well-formed YAML metadata header", check_header_present, fix_hint="Start the document with a `---` delimited YAML mapping."),
    CheckDef("metadata.title_present", "metadata", "require a non-empty document title", check_title_present, fix_hint="Add a `title:` field to the metadata header.", tags=("required",)),
    CheckDef("metadata.date_valid", "metadata", "require a valid, non-future publication date", check_date_valid, fix_hint="Set `ms.date:` (MM/DD/YYYY) or `date:` (YYYY-MM-DD).", tags=("required",)),
    CheckDef("metadata.keywords_present", "metadata", "expect at least one searchable keyword tag", check_keywords_present, severity=Severity.WARN, fix_hint="Add `f1_keywords:` or `helpviewer_keywords:` entries."),
    CheckDef("metadata.required_fields", "metadata", "require configured header fields", check_required_fields, fix_hint="Add the fields listed under `required_fields` in corpusctl.yaml."),
)


def register() -> tuple[CheckDef, ...]:
    return CHECKS
