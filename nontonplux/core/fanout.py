"""
Fan-out helpers - concurrent map with per-item failure isolation.

Providers resolve every mirror of an episode independently. A mirror
that throws is logged and skipped; it never cancels its siblings and
never fails the surrounding operation.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def safe_call(
    func: Callable[..., Awaitable[R]],
    *args: Any,
    description: Optional[str] = None,
    **kwargs: Any,
) -> Optional[R]:
    """
    Await `func`, returning None instead of raising.

    Args:
        func: Coroutine function to call
        *args: Positional arguments for func
        description: Label used in the log line on failure
        **kwargs: Keyword arguments for func

    Returns:
        The call result, or None if it raised
    """
    try:
        return await func(*args, **kwargs)
    except Exception as e:
        label = description or getattr(func, "__name__", repr(func))
        logger.warning(f"{label} failed: {e}")
        logger.debug("Isolated failure details", exc_info=True)
        return None


async def concurrent_map(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    max_concurrency: Optional[int] = None,
) -> List[Optional[R]]:
    """
    Run `func` over every item concurrently.

    Each call is wrapped in safe_call, so the returned list holds None
    for items that failed. Results line up with the input order even
    though completion order is unspecified.

    Args:
        func: Coroutine function applied to each item
        items: Items to process
        max_concurrency: Optional bound on simultaneous calls

    Returns:
        One result (or None) per item
    """
    items = list(items)
    if not items:
        return []

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def run(item: T) -> Optional[R]:
        if semaphore is None:
            return await safe_call(func, item)
        async with semaphore:
            return await safe_call(func, item)

    return list(await asyncio.gather(*(run(item) for item in items)))


__all__ = ["safe_call", "concurrent_map"]
