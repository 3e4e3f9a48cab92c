"""Retrieve the exported sheet, falling back through proxies to the sample."""

import logging
from urllib.parse import quote

import requests

from ein_chart import http_client
from ein_chart.config import CORS_PROXIES, EXPORT_URL
from ein_chart.csv_parser import ParseError, parse
from ein_chart.sample import SAMPLE_CSV

_LOGGER = logging.getLogger(__name__)

SAMPLE_SOURCE = "sample"


def export_url(sheet_id: str, gid: int = 0) -> str:
    return EXPORT_URL.format(sheet_id=sheet_id, gid=gid)


def proxied_url(proxy: str, url: str) -> str:
    """Prefix *url*, fully percent-encoded, with *proxy*."""
    return proxy + quote(url, safe="")


def candidate_urls(sheet_id: str, gid: int = 0,
                   proxies: list[str] | None = None) -> list[str]:
    """Direct export URL followed by each proxied variant, in order."""
    url = export_url(sheet_id, gid)
    if proxies is None:
        proxies = CORS_PROXIES
    return [url] + [proxied_url(p, url) for p in proxies]


def fetch_csv(
    sheet_id: str,
    gid: int = 0,
    user_agent: str | None = None,
    proxies: list[str] | None = None,
) -> tuple[str, str]:
    """
    Return ``(csv_text, source)``.

    *source* is the URL whose body parsed as CSV, or ``"sample"`` when every
    attempt failed and the built-in dataset was used.  Network errors and
    unparsable bodies both move on to the next source; never raises for
    either.
    """
    if not sheet_id:
        _LOGGER.warning("No sheet id configured, using sample data")
        return SAMPLE_CSV, SAMPLE_SOURCE

    for url in candidate_urls(sheet_id, gid, proxies):
        _LOGGER.info("Fetching %s", url)
        try:
            resp = http_client.get(url, user_agent=user_agent)
        except requests.RequestException as exc:
            _LOGGER.info("Source %s failed: %s", url, exc)
            continue
        resp.encoding = "utf-8"
        text = resp.text
        try:
            parse(text)
        except ParseError as exc:
            _LOGGER.info("Source %s returned unusable CSV: %s", url, exc)
            continue
        return text, url

    _LOGGER.warning("All data sources failed, using sample data")
    return SAMPLE_CSV, SAMPLE_SOURCE
