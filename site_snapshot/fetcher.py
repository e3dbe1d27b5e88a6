"""HTTP retrieval of raw page markup."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .errors import HTTPStatusError, TransportError

logger = logging.getLogger("site_snapshot")


def fetch_content(url: str, timeout: Optional[float] = None) -> bytes:
    """Issue a single GET for ``url`` and return the full response body.

    Anything other than a 200 response is treated as a failure.
    """
    try:
        resp = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(str(exc)) from exc

    if resp.status_code != 200:
        raise HTTPStatusError(resp.status_code, resp.reason or "")

    data = resp.content
    logger.debug("Fetched %d bytes from %s", len(data), url)
    return data
