"""
HTTP access to the remote book catalog.

The remote source is a plain JSON document reachable with an anonymous
GET. This module only knows how to retrieve its bytes: decoding the
payload is the job of ``store.parse_books``. Any transport problem
(connection error, timeout, non-2xx status) is logged and reported as
``None`` so that the caller can fall back to the bundled dataset.
"""

from __future__ import annotations

import logging
import urllib.request
from typing import Optional


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def fetch_remote_bytes(url: str, timeout: float = DEFAULT_TIMEOUT) -> Optional[bytes]:
    """Perform an HTTP GET and return the raw body or ``None`` on failure.

    ``urlopen`` raises ``HTTPError`` for 4xx/5xx responses; any other
    status outside the 2xx range (e.g. an unfollowed redirect) is
    rejected explicitly.
    """
    if not url:
        logger.info("No remote catalog URL configured, skipping remote fetch")
        return None
    try:
        request = urllib.request.Request(
            url,
            headers={
                'User-Agent': 'books-catalog/1.0',
                'Accept': 'application/json',
            },
        )
        with urllib.request.urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                logger.warning(
                    "Remote catalog request to %s returned status %s", url, status
                )
                return None
            return response.read()
    except Exception as exc:
        logger.error("Error fetching remote catalog %s: %s", url, exc)
        return None
