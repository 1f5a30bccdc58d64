from __future__ import annotations

import urllib.error
import urllib.request

from .. import __version__

USER_AGENT = f"corpusctl-link-check/{__version__}"


def is_allowed(target: str, allowlist: tuple[str, ...]) -> bool:
    return any(target.startswith(pattern) for pattern in allowlist)


def probe(url: str, timeout_s: float = 10.0) -> tuple[bool, str]:
    req = urllib.request.Request(url, method="HEAD", headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as response:
            return response.status < 400, str(response.status)
    except urllib.error.HTTPError as err:
        if err.code in {403, 405, 501}:
            fallback = urllib.request.Request(url, method="GET", headers={"User-Agent": USER_AGENT})
            try:
                with urllib.request.urlopen(fallback, timeout=timeout_s) as response:
                    return response.status < 400, str(response.status)
            except urllib.error.HTTPError as inner:
                return False, str(inner.code)
            except (urllib.error.URLError, OSError) as inner:
                return False, str(getattr(inner, "reason", inner))
        return False, str(err.code)
    except (urllib.error.URLError, OSError) as err:
        return False, str(getattr(err, "reason", err))
