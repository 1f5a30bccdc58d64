from __future__ import annotations

from ..model import CheckContext, CheckDef, Severity, Violation


def check_fences_closed(ctx: CheckContext) -> list[Violation]:
    return [
        Violation("SAMPLES_FENCE_UNCLOSED", "code fence is never closed", doc.path, sample.line)
        for doc in ctx.corpus
        for sample in doc.samples
        if not sample.closed
    ]


def check_language_tagged(ctx: CheckContext) -> list[Violation]:
    return [
        Violation("SAMPLES_LANGUAGE_MISSING", "code fence has no language tag", doc.path, sample.line, Severity.WARN)
        for doc in ctx.corpus
        for sample in doc.samples
        if not sample.language
    ]


CHECKS: tuple[CheckDef, ...] = (
    CheckDef("samples.fences_closed", "samples", "require every code fence to terminate", check_fences_closed, fix_hint="Add the closing fence."),
    CheckDef("samples.language_tagged", "samples", "expect code fences to declare a language", check_language_tagged, severity=Severity.WARN, fix_hint="Add a language after the opening fence, e.g. ```csharp."),
)


def register() -> tuple[CheckDef, ...]:
    return CHECKS
