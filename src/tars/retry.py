"""Fixed-attempts, fixed-delay retry policy built on tenacity."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from tars.exceptions import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_retriable(exc: BaseException) -> bool:
    """Only transport failures that may succeed on another attempt are retried."""
    return isinstance(exc, TransportError) and exc.retriable


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "retrying request | attempt=%d error=%s",
        retry_state.attempt_number,
        exc,
    )


@dataclass(frozen=True)
class RetryPolicy:
    """Run a coroutine up to ``max_attempts`` times, ``delay`` seconds apart.

    Attempts are strictly sequential. Cancellation is never retried.
    """

    max_attempts: int = 1
    delay: float = 0.0

    def retrying(self) -> AsyncRetrying:
        """A fresh tenacity controller; one per call so calls share no state."""
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.delay),
            retry=retry_if_exception(is_retriable),
            before_sleep=_log_retry,
            reraise=True,
        )

    async def run(self, fn: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``fn(*args, **kwargs)`` under this policy.

        Raises:
            Exception: The last error once the attempt budget is spent, or the
                first non-retriable one.
        """
        return await self.retrying()(fn, *args, **kwargs)
