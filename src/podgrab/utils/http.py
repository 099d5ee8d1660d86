"""Shared httpx client handling."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

USER_AGENT = "podgrab"


def create_client(
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the client used for feed and media requests.

    Args:
        timeout: Per-request timeout in seconds. None waits indefinitely.
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        Configured AsyncClient; the caller owns closing it
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )


@asynccontextmanager
async def client_session(
    client: httpx.AsyncClient | None, timeout: float | None = None
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield ``client`` as-is, or a short-lived one when none was given."""
    if client is not None:
        yield client
        return

    async with create_client(timeout=timeout) as owned:
        yield owned
