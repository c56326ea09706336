"""Shared httpx.AsyncClient for all outbound requests.

One connection pool per process; created lazily on first use and closed on
shutdown by ``close_http_client``.
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_client: Optional[httpx.AsyncClient] = None
_timeout: float = DEFAULT_TIMEOUT


def configure_http_client(timeout: float = DEFAULT_TIMEOUT) -> None:
    """Set the timeout used when the shared client is created."""
    global _timeout
    _timeout = timeout


def get_http_client() -> httpx.AsyncClient:
    global _client
    if _client is None or _client.is_closed:
        logger.debug("Creating shared HTTP client (timeout=%.1fs)", _timeout)
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(_timeout),
            headers={"Accept": "application/json"},
        )
    return _client


async def close_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
