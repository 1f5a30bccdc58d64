from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping

from ..config import DEFAULT_CONFIG, CorpusConfig
from ..model import Corpus

_CHECK_ID_PATTERN = re.compile(r"^[a-z]+\.[a-z0-9_]+$")
_RESULT_CODE_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")
DOMAINS = frozenset({"layout", "links", "metadata", "samples"})


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class Violation:
    code: str
    message: str
    path: str = ""
    line: int = 0
    severity: Severity = Severity.ERROR
    hint: str = ""

    def __post_init__(self) -> None:
        code = str(self.code).strip() or "CHECK_GENERIC"
        if not _RESULT_CODE_PATTERN.fullmatch(code):
            raise ValueError(f"invalid result code `{code}`: expected UPPER_SNAKE_CASE")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", str(self.message).strip())
        object.__setattr__(self, "path", str(self.path).strip())
        object.__setattr__(self, "line", int(self.line or 0))

    @property
    def canonical_key(self) -> tuple[str, int, str, str]:
        return (self.path, self.line, self.code, self.message)

    def render(self) -> str:
        where = self.path if not self.line else f"{self.path}:{self.line}"
        return f"{where}: {self.message}" if where else self.message

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "severity": self.severity.value,
            "hint": self.hint,
        }


@dataclass(frozen=True)
class CheckContext:
    corpus: Corpus
    root: Path
    config: CorpusConfig = DEFAULT_CONFIG
    network: bool = False


CheckFn = Callable[[CheckContext], list[Violation]]


@dataclass(frozen=True)
class CheckDef:
    check_id: str
    domain: str
    description: str
    fn: CheckFn
    severity: Severity = Severity.ERROR
    fix_hint: str = "Review check output and fix the reported documents."
    tags: tuple[str, ...] = ()
    network: bool = False

    def __post_init__(self) -> None:
        cid = str(self.check_id).strip()
        if not _CHECK_ID_PATTERN.fullmatch(cid):
            raise ValueError(f"invalid check id `{cid}`: expected <domain>.<name> snake_case")
        domain = str(self.domain).strip()
        if domain not in DOMAINS:
            raise ValueError(f"invalid domain `{domain}`: must be one of {sorted(DOMAINS)}")
        if cid.split(".", 1)[0] != domain:
            raise ValueError(f"invalid check id `{cid}`: domain segment must match `{domain}`")
        object.__setattr__(self, "check_id", cid)
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "description", str(self.description).strip())
        object.__setattr__(self, "tags", tuple(sorted({str(t).strip() for t in self.tags if str(t).strip()})))

    @property
    def id(self) -> str:
        return self.check_id


@dataclass(frozen=True)
class CheckResult:
    id: str
    domain: str
    title: str
    status: CheckStatus
    severity: Severity = Severity.ERROR
    violations: tuple[Violation, ...] = ()
    duration_ms: int = 0
    fix_hint: str = ""
    error: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "violations", tuple(sorted(self.violations, key=lambda v: v.canonical_key)))

    @property
    def errors(self) -> tuple[Violation, ...]:
        return tuple(v for v in self.violations if v.severity == Severity.ERROR)

    @property
    def warnings(self) -> tuple[Violation, ...]:
        return tuple(v for v in self.violations if v.severity != Severity.ERROR)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "id": self.id,
            "domain": self.domain,
            "title": self.title,
            "status": self.status.value,
            "severity": self.severity.value,
            "duration_ms": self.duration_ms,
            "fix_hint": self.fix_hint,
            "violations": [v.to_dict() for v in self.violations],
        }
        if self.error:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class CheckRunReport:
    rows: tuple[CheckResult, ...] = ()
    documents: int = 0
    summary: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.rows, key=lambda row: (row.domain, row.id)))
        object.__setattr__(self, "rows", ordered)
        if not self.summary:
            object.__setattr__(
                self,
                "summary",
                {
                    "passed": sum(1 for row in ordered if row.status == CheckStatus.PASS),
                    "failed": sum(1 for row in ordered if row.status == CheckStatus.FAIL),
                    "skipped": sum(1 for row in ordered if row.status == CheckStatus.SKIP),
                    "errors": sum(1 for row in ordered if row.status == CheckStatus.ERROR),
                    "total": len(ordered),
                    "violations": sum(len(row.errors) for row in ordered),
                    "warnings": sum(len(row.warnings) for row in ordered),
                },
            )

    def failed(self, strict: bool = False) -> bool:
        if self.summary["failed"] or self.summary["errors"]:
            return True
        return strict and self.summary["warnings"] > 0

    def status(self, strict: bool = False) -> str:
        return "fail" if self.failed(strict) else "ok"
