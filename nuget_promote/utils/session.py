"""
Session utilities for feed operations.

This module provides utilities for creating and configuring async HTTP
clients with retry strategies and connection pooling.
"""

import importlib.util
import logging
from typing import Optional, Tuple

import httpx

from .constants import DEFAULT_TIMEOUT, USER_AGENT

# ============================================================================
# HTTP Configuration Constants
# ============================================================================

# Connection-level retries performed by the transport
MAX_RETRIES = 3

# Connection pool sizes; a promotion run issues one request at a time per feed
MAX_CONNECTIONS = 20
MAX_KEEPALIVE_CONNECTIONS = 10


def create_async_session(
    auth: Optional[Tuple[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_connections: int = MAX_CONNECTIONS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create an httpx async client with retries and connection pooling.

    Args:
        auth: Optional (username, password) tuple for basic authentication
        timeout: Total timeout in seconds
        max_connections: Maximum number of connections in the pool
        transport: Optional transport override (used by tests)

    Returns:
        Configured httpx.AsyncClient with:
        - Connection retries on the transport
        - HTTP/2 when the h2 package is installed
        - Compression support (gzip, deflate)
        - Redirect following (flat container downloads redirect to blob storage)

    Example:
        >>> client = create_async_session(auth=("user", "secret"), timeout=300.0)
    """
    limits = httpx.Limits(
        max_connections=max_connections,
        max_keepalive_connections=min(MAX_KEEPALIVE_CONNECTIONS, max_connections),
    )

    use_http2 = importlib.util.find_spec("h2") is not None
    if not use_http2:
        logging.debug("HTTP/2 support not available (h2 package not installed)")

    if transport is None:
        transport = httpx.AsyncHTTPTransport(limits=limits, retries=MAX_RETRIES, http2=use_http2)

    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(timeout, connect=10.0),
        follow_redirects=True,
        headers={"Accept-Encoding": "gzip, deflate", "User-Agent": USER_AGENT},
        auth=httpx.BasicAuth(*auth) if auth else None,
    )


__all__ = ["create_async_session"]
