"""
Helpers for the per-request scrape deadline.

A deadline is an absolute event loop time (``loop.time()``) or ``None`` when
the request imposes no bound of its own.
"""

import asyncio
import logging
import math
from typing import Awaitable, Optional, TypeVar

logger = logging.getLogger(__name__)

SCRAPE_TIMEOUT_HEADER = "X-Prometheus-Scrape-Timeout-Seconds"

T = TypeVar("T")


def parse_timeout_seconds(value: Optional[str]) -> Optional[float]:
    """
    Parses the value of the scrape timeout header.

    Returns None when the header is absent, unparseable, or not a positive
    finite number; the request then runs without an extra timeout.
    """
    if value is None or value.strip() == "":
        return None
    try:
        seconds = float(value)
    except ValueError:
        logger.warning("Ignoring unparseable %s=%r", SCRAPE_TIMEOUT_HEADER, value)
        return None
    if not math.isfinite(seconds) or seconds <= 0:
        logger.warning("Ignoring non-positive %s=%r", SCRAPE_TIMEOUT_HEADER, value)
        return None
    return seconds


def deadline_after(seconds: Optional[float]) -> Optional[float]:
    """Returns the loop time at which a timeout of `seconds` expires, or None."""
    if seconds is None:
        return None
    return asyncio.get_running_loop().time() + seconds


def time_remaining(deadline: Optional[float]) -> Optional[float]:
    """Seconds left until the deadline (never negative), or None when unbounded."""
    if deadline is None:
        return None
    return max(0.0, deadline - asyncio.get_running_loop().time())


async def wait_until(aw: Awaitable[T], deadline: Optional[float]) -> T:
    """
    Awaits `aw`, cancelling it if the deadline passes first.

    Raises:
        asyncio.TimeoutError: If the deadline expires.
    """
    remaining = time_remaining(deadline)
    if remaining == 0.0:
        # Already expired: never start the call
        if asyncio.iscoroutine(aw):
            aw.close()
        raise asyncio.TimeoutError()
    return await asyncio.wait_for(aw, timeout=remaining)
