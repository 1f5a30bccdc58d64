from .model import CheckContext, CheckDef, CheckResult, CheckRunReport, CheckStatus, Severity, Violation
from .registry import get_check, list_checks, select_checks
from .runner import run_check, run_checks

__all__ = [
    "CheckContext",
    "CheckDef",
    "CheckResult",
    "CheckRunReport",
    "CheckStatus",
    "Severity",
    "Violation",
    "get_check",
    "list_checks",
    "run_check",
    "run_checks",
    "select_checks",
]
