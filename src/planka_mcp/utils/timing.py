"""Duration logging for multi-call operations."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable

logger = logging.getLogger("planka_mcp")


def timed(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Log how long an aggregator took, and whether it failed.

    Aggregators take ``(client, target_id, ...)``; the target id is included in
    the log line so interleaved operations can be told apart.
    """

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        target = args[1] if len(args) > 1 else "-"
        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception:
            logger.debug("%s(%s) failed after %.3fs", fn.__name__, target, time.monotonic() - start)
            raise
        logger.debug("%s(%s) completed in %.3fs", fn.__name__, target, time.monotonic() - start)
        return result

    return wrapper
