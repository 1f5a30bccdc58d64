from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from ..config import CorpusConfig, load_config
from .env import getenv, getenv_flag
from .paths import evidence_root_path, find_corpus_root

OutputFormat = Literal["text", "json"]
NetworkMode = Literal["allow", "forbid"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    root: Path
    evidence_root: Path
    config: CorpusConfig
    output_format: OutputFormat
    network_mode: NetworkMode
    verbose: bool
    quiet: bool
    log_json: bool

    @property
    def no_network(self) -> bool:
        return self.network_mode == "forbid"

    @classmethod
    def from_args(
        cls,
        root: str | None = None,
        config_path: str | None = None,
        run_id: str | None = None,
        evidence_root: str | None = None,
        output_format: OutputFormat = "text",
        network_mode: NetworkMode | None = None,
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        raw_root = root or getenv("CORPUSCTL_ROOT")
        resolved_root = Path(raw_root).resolve() if raw_root else find_corpus_root()
        default_run = f"corpus-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or getenv("CORPUSCTL_RUN_ID") or default_run
        resolved_evidence_root = evidence_root_path(resolved_root, evidence_root or getenv("CORPUSCTL_EVIDENCE_ROOT"))
        resolved_network: NetworkMode = network_mode or ("allow" if getenv("CORPUSCTL_NETWORK") == "allow" else "forbid")
        return cls(
            run_id=resolved_run_id,
            root=resolved_root,
            evidence_root=resolved_evidence_root,
            config=load_config(resolved_root, Path(config_path) if config_path else None),
            output_format=output_format,
            network_mode=resolved_network,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json or getenv_flag("CORPUSCTL_LOG_JSON"),
        )
