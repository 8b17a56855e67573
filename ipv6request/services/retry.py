"""Bounded retry with exponential backoff for upstream HTTP calls.

Only two outcomes are retried: a transport failure (``httpx.TransportError``
covers connect errors, DNS failures and timeouts) and an HTTP 429 answer.
Rate-limit waits are four times longer than transport waits. When the last
attempt still fails, a transport error is re-raised while a 429 response is
handed back untouched so the caller can classify it.
"""

import asyncio
import logging
from typing import Awaitable, Callable

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
)

logger = logging.getLogger(__name__)

RequestFunc = Callable[[], Awaitable[httpx.Response]]
Backoff = Callable[[int], float]
Sleep = Callable[[float], Awaitable[None]]


def transport_backoff(attempt: int) -> float:
    """Seconds to wait after failed attempt ``attempt`` (1-based): 1, 2, 4..."""
    return float(2 ** (attempt - 1))


def rate_limit_backoff(attempt: int) -> float:
    """Seconds to wait after a 429 on attempt ``attempt`` (1-based): 4, 8, 16..."""
    return float(2 ** (attempt + 1))


def is_rate_limited(response: httpx.Response) -> bool:
    return response.status_code == 429


class RetryPolicy:
    """Run a zero-argument request coroutine up to ``max_attempts`` times."""

    def __init__(
        self,
        max_attempts: int = 3,
        *,
        transport_backoff: Backoff = transport_backoff,
        rate_limit_backoff: Backoff = rate_limit_backoff,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.max_attempts = max(1, max_attempts)
        self.transport_backoff = transport_backoff
        self.rate_limit_backoff = rate_limit_backoff
        self._sleep = sleep

    def _wait(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            return self.transport_backoff(retry_state.attempt_number)
        return self.rate_limit_backoff(retry_state.attempt_number)

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
        if outcome is not None and outcome.failed:
            logger.warning(
                "API request failed (attempt %d/%d), retrying in %.0fs: %s",
                retry_state.attempt_number,
                self.max_attempts,
                wait,
                outcome.exception(),
            )
        else:
            # client.get() has already read and released the 429 body
            logger.warning(
                "Rate limited (429), retrying in %.0fs (attempt %d/%d)",
                wait,
                retry_state.attempt_number,
                self.max_attempts,
            )

    @staticmethod
    def _give_up(retry_state: RetryCallState) -> httpx.Response:
        # Re-raises the last transport error, or returns the last 429.
        return retry_state.outcome.result()  # type: ignore[union-attr]

    async def run(self, request_fn: RequestFunc) -> httpx.Response:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=(
                retry_if_exception_type(httpx.TransportError)
                | retry_if_result(is_rate_limited)
            ),
            before_sleep=self._before_sleep,
            retry_error_callback=self._give_up,
            sleep=self._sleep,
        )
        return await retrying(request_fn)
