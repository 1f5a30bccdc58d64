from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_CONFIG, ERR_INTERNAL, ERR_VALIDATION


@dataclass
class ScriptError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class ConfigError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONFIG, "config_error")


class DuplicateDocumentError(ScriptError):
    def __init__(self, path: str) -> None:
        super().__init__(f"duplicate document path: {path}", ERR_VALIDATION, "duplicate_document")
        self.path = path
