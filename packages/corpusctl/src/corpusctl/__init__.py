__version__ = "0.1.0"

__all__ = [
    "__version__",
    "checks",
    "cli",
    "config",
    "contracts",
    "core",
    "errors",
    "exit_codes",
    "gen",
    "index",
    "loader",
    "model",
    "parse",
]
