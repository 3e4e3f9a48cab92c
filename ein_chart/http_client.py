"""Shared HTTP client with retries and a descriptive User-Agent."""

import time
import requests

from ein_chart.config import (
    BACKOFF_BASE,
    MAX_RETRIES,
    REQUEST_TIMEOUT,
    USER_AGENT,
)

_RETRY_STATUSES = {429, 500, 502, 503, 504}


def get(url: str, user_agent: str | None = None,
        timeout: float | None = None) -> requests.Response:
    """
    GET *url* with the configured User-Agent and a short retry loop.

    429 and 5xx responses back off and retry; anything else that is not a
    200 raises ``requests.HTTPError``.  Connection errors propagate as
    ``requests.RequestException``.
    """
    ua = user_agent or USER_AGENT
    headers = {
        "User-Agent": ua,
        "Accept": "text/csv, text/plain, */*",
    }

    for attempt in range(MAX_RETRIES + 1):
        resp = requests.get(url, headers=headers, timeout=timeout or REQUEST_TIMEOUT)

        if resp.status_code == 200:
            return resp

        if resp.status_code in _RETRY_STATUSES and attempt < MAX_RETRIES:
            time.sleep(BACKOFF_BASE * (2 ** attempt))
            continue

        resp.raise_for_status()
        # Non-error but not 200 (e.g. 204); treat as unusable.
        raise requests.HTTPError(f"Unexpected status {resp.status_code} for {url}", response=resp)

    resp.raise_for_status()
    return resp  # pragma: no cover
