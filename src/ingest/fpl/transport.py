"""
FPL HTTP transport.

Issues a single GET against the upstream API, optionally rewritten through a
proxy prefix. Retries are layered on top by ``rate_limiter``; this module
never retries on its own.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from utils.constants import REQUEST_HEADERS
from .errors import NetworkError

logger = logging.getLogger(__name__)


def build_proxied_url(proxy: str, target_url: str) -> str:
    """
    Rewrite a target URL through a proxy prefix.

    Args:
        proxy: Proxy prefix. Empty means direct. A prefix ending in ``=`` or
            ``?`` takes the target URL-encoded (``/api/proxy?url=``); any
            other prefix takes it verbatim (``https://host/fetch/``).
        target_url: Upstream URL

    Returns:
        URL to request
    """
    if not proxy:
        return target_url
    if proxy.endswith(("=", "?")):
        return f"{proxy}{quote(target_url, safe='')}"
    return f"{proxy}{target_url}"


class Transport:
    """Single-shot JSON GET over a shared requests session."""

    def __init__(self, session: Optional[requests.Session] = None,
                 headers: Optional[Dict[str, str]] = None,
                 timeout: Optional[float] = None):
        self.session = session or requests.Session()
        self.headers = dict(REQUEST_HEADERS if headers is None else headers)
        self.timeout = timeout

    def _get_blocking(self, url: str) -> Any:
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise NetworkError(None, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise NetworkError(response.status_code, response.reason or "HTTP error")

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(response.status_code, f"malformed JSON: {e}") from e

    async def get(self, url: str, proxy: str = "") -> Any:
        """
        Fetch and decode one JSON body.

        Raises:
            NetworkError: On connection failure, non-2xx status or malformed JSON
        """
        full_url = build_proxied_url(proxy, url)
        logger.info(f"Attempting to fetch: {full_url}")
        return await asyncio.to_thread(self._get_blocking, full_url)

    def close(self) -> None:
        self.session.close()
