"""Shared persistent httpx client for external API calls.

A persistent client avoids a new TCP connection + TLS handshake for every
lookup.
"""

import httpx

from bookshelf.config import get_settings

_POOL_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
    keepalive_expiry=30,
)

_general_client: httpx.AsyncClient | None = None


def get_general_client() -> httpx.AsyncClient:
    """Get persistent httpx client for metadata lookups."""
    global _general_client
    if _general_client is None:
        _general_client = httpx.AsyncClient(
            timeout=get_settings().ndl_timeout,
            limits=_POOL_LIMITS,
            follow_redirects=True,
            headers={"Accept": "application/xml, text/xml"},
        )
    return _general_client


async def close_all_clients() -> None:
    """Close the persistent httpx client. Call during app shutdown."""
    global _general_client
    if _general_client is not None:
        await _general_client.aclose()
        _general_client = None
