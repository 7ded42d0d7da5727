import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

_log = logging.getLogger(__name__)


def _is_transient(exc: Exception) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return False


async def with_retry(fn: Callable[..., Awaitable[Any]], *args: Any, max_retries: int = 4, **kwargs: Any) -> Any:
    """Await an HTTP call with exponential backoff on transport errors and 5xx responses.

    Waits 1, 2, 4 seconds between retries. Anything else propagates immediately.
    """
    for attempt in range(max_retries):
        try:
            return await fn(*args, **kwargs)
        except (httpx.TransportError, httpx.HTTPStatusError) as exc:
            if not _is_transient(exc) or attempt == max_retries - 1:
                raise
            wait = 2 ** attempt
            _log.debug("transient GitHub error (%s), retrying in %ss", exc, wait)
            await asyncio.sleep(wait)
