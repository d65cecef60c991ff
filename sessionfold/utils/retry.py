"""Retry utilities with exponential backoff."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


async def retry_with_backoff(
    func: Callable,
    max_retries: int = 2,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
    *args,
    **kwargs,
) -> Any:
    """
    Await func(*args, **kwargs), retrying failures with capped exponential backoff.

    Attempt n (0-based) is followed by a sleep of min(base_delay * 2**n, max_delay)
    seconds, except after the final attempt.

    Returns:
        Result from func

    Raises:
        Exception: The exception from the final attempt
    """
    last_exception = None
    for attempt in range(max_retries + 1):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            last_exception = e
            if attempt < max_retries:
                delay = min(base_delay * (2**attempt), max_delay)
                logger.debug(
                    "Attempt %d/%d failed (%s), retrying in %.2fs",
                    attempt + 1,
                    max_retries + 1,
                    e,
                    delay,
                )
                await asyncio.sleep(delay)
    raise last_exception
