from __future__ import annotations

OK = 0
ERR_CHECKS = 1
ERR_USAGE = 2
ERR_CONFIG = 10
ERR_VALIDATION = 11
ERR_ARTIFACT = 12
ERR_INTERNAL = 99
