from __future__ import annotations

import requests


def _retry_after_seconds(response: requests.Response | None) -> float | None:
    if response is None:
        return None
    raw = (response.headers.get("Retry-After") or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        # HTTP-date form is rare for YouTube; fall back to plain backoff.
        return None


def is_retryable_http_exception(exc: BaseException) -> tuple[bool, float | None, str | None]:
    """
    Retry policy for page downloads:
    - connection errors and timeouts
    - HTTP 429 (honouring Retry-After)
    - HTTP 5xx
    """
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return True, None, "network_error"

    if isinstance(exc, requests.HTTPError):
        response = exc.response
        code = response.status_code if response is not None else None
        reason = f"http_{code}" if code is not None else "http_status"
        if code == 429:
            return True, _retry_after_seconds(response), reason
        if code is not None and code >= 500:
            return True, None, reason
        return False, None, reason

    return False, None, None
