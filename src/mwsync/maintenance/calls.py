"""Timeout wrapper for calls to the monitoring server."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from mwsync.maintenance.errors import TransportError

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0


async def call_with_timeout(operation: str, awaitable: Awaitable[T], timeout: float | None) -> T:
    """Await a server call, turning a timeout into TransportError.

    Args:
        operation: Short description used in the error message.
        awaitable: The pending client call.
        timeout: Seconds to wait, or None to wait indefinitely.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        raise TransportError(f"{operation} timed out after {timeout}s") from None
