# ================================================================================
# Polling Assertions
# ================================================================================
#
# Retry-until-satisfied checks for UI state that may not be rendered yet.
#
# Every "should be visible / should exist / should have N rows" check in the
# Page Objects goes through PollingAssertion: the query is re-run and the
# predicate re-evaluated until it holds or the timeout budget is spent.
#
# Key Features:
#   - Fixed polling interval, final sleep clipped to the remaining budget
#   - Query/predicate errors treated as "not yet satisfied" and retried
#   - TimeoutExceeded carries the last observed state for diagnostics
#   - Sync or async query and predicate callables
#   - Injectable clock and sleep for deterministic tests
#   - Allure step integration
#
# Usage:
#   poller = PollingAssertion(timeout=4000, interval=100)
#   state = await poller.until(query, predicate, "search input visible")
#
# ================================================================================

from __future__ import annotations

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import allure
from loguru import logger


# Defaults in milliseconds, matching Playwright's timeout units
DEFAULT_TIMEOUT_MS = 4000
DEFAULT_INTERVAL_MS = 100

_UNSET = object()


class PollingAssertionError(AssertionError):
    """Base class for polling assertion failures."""
    pass


class TimeoutExceeded(PollingAssertionError):
    """
    Raised when no check within the timeout budget satisfied the predicate.

    Attributes:
        description: Human-readable predicate description
        last_state: Last value returned by the query (None if it never returned)
        last_error: Last exception raised by the query or predicate, if any
        attempts: Number of query/predicate evaluations performed
        elapsed_ms: Time spent before giving up
        timeout_ms: Budget that was exceeded
    """

    def __init__(
        self,
        description: str,
        last_state: Any = None,
        last_error: Optional[BaseException] = None,
        attempts: int = 0,
        elapsed_ms: float = 0.0,
        timeout_ms: float = 0.0,
    ):
        self.description = description
        self.last_state = last_state
        self.last_error = last_error
        self.attempts = attempts
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        super().__init__(self._format())

    def _format(self) -> str:
        message = (
            f"Timed out after {self.elapsed_ms:.0f}ms "
            f"(timeout={self.timeout_ms:.0f}ms, attempts={self.attempts}) "
            f"waiting for: {self.description}. "
            f"Last state: {self.last_state!r}"
        )
        if self.last_error is not None:
            message += f", last error: {type(self.last_error).__name__}: {self.last_error}"
        return message


class AmbiguousFallback(PollingAssertionError):
    """Raised when neither a primary check nor its fallback found any evidence."""

    def __init__(self, message: str, primary: str, fallback: str):
        self.primary = primary
        self.fallback = fallback
        super().__init__(message)


@dataclass
class Condition:
    """
    A single check to be polled.

    Attributes:
        description: Human-readable predicate description, used in logs and errors
        query: Callable returning the observed state (may be async)
        predicate: Callable over the observed state returning truthiness (may be async)
        timeout: Budget in milliseconds, or None for the poller default
        interval: Polling interval in milliseconds, or None for the poller default
    """
    description: str
    query: Callable[[], Any]
    predicate: Callable[[Any], Any]
    timeout: Optional[int] = None
    interval: Optional[int] = None

    def with_timeout(self, timeout: Optional[int]) -> "Condition":
        """Return a copy of this condition with a different timeout."""
        return Condition(
            description=self.description,
            query=self.query,
            predicate=self.predicate,
            timeout=timeout,
            interval=self.interval,
        )


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class PollingAssertion:
    """
    Re-evaluates a Condition until it holds or its timeout elapses.

    The final sleep before the deadline is clipped to the remaining budget,
    so a condition that never holds fails no earlier than ``timeout`` and no
    later than ``timeout + interval``.

    Example:
        poller = PollingAssertion(timeout=2000, interval=100)
        rows = await poller.until(
            lambda: table.locator("tr").count(),
            lambda count: count == 3,
            "results table has 3 rows",
        )
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT_MS,
        interval: int = DEFAULT_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            timeout: Default budget in milliseconds
            interval: Default polling interval in milliseconds
            clock: Monotonic clock returning seconds
            sleep: Async sleep taking seconds
        """
        if interval <= 0:
            raise ValueError(f"Polling interval must be positive, got {interval}")
        self.timeout = timeout
        self.interval = interval
        self._clock = clock
        self._sleep = sleep

    async def until(
        self,
        query: Callable[[], Any],
        predicate: Callable[[Any], Any],
        description: str = "condition",
        timeout: Optional[int] = None,
        interval: Optional[int] = None,
    ) -> Any:
        """
        Poll ``query`` until ``predicate`` holds for its result.

        Returns:
            The first observed state that satisfied the predicate

        Raises:
            TimeoutExceeded: If the budget is spent without success
        """
        return await self.check(
            Condition(description, query, predicate, timeout, interval)
        )

    async def check(self, condition: Condition) -> Any:
        """
        Poll a Condition.

        Returns:
            The first observed state that satisfied the predicate

        Raises:
            TimeoutExceeded: If the budget is spent without success
        """
        timeout = self.timeout if condition.timeout is None else condition.timeout
        interval = self.interval if condition.interval is None else condition.interval

        with allure.step(f"Wait until: {condition.description}"):
            start = self._clock()
            attempt = 0
            last_state: Any = _UNSET
            last_error: Optional[BaseException] = None

            while True:
                attempt += 1
                try:
                    state = await _resolve(condition.query())
                    last_state = state
                    if await _resolve(condition.predicate(state)):
                        elapsed_ms = (self._clock() - start) * 1000
                        logger.debug(
                            f"Condition met after {attempt} attempts "
                            f"({elapsed_ms:.0f}ms): {condition.description}"
                        )
                        return state
                    last_error = None
                except Exception as e:
                    last_error = e
                    logger.debug(
                        f"Attempt {attempt} for '{condition.description}' raised "
                        f"{type(e).__name__}: {e}"
                    )

                elapsed_ms = (self._clock() - start) * 1000
                if elapsed_ms >= timeout:
                    error = TimeoutExceeded(
                        description=condition.description,
                        last_state=None if last_state is _UNSET else last_state,
                        last_error=last_error,
                        attempts=attempt,
                        elapsed_ms=elapsed_ms,
                        timeout_ms=timeout,
                    )
                    logger.error(str(error))
                    raise error

                await self._sleep(min(interval, timeout - elapsed_ms) / 1000)


def wait_until(
    query: Callable[[], Any],
    predicate: Callable[[Any], bool],
    description: str = "condition",
    timeout: int = DEFAULT_TIMEOUT_MS,
    interval: int = DEFAULT_INTERVAL_MS,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Any] = time.sleep,
) -> Any:
    """
    Blocking counterpart of ``PollingAssertion.until`` for synchronous callers.

    Same contract: query errors are retried, the final sleep is clipped to
    the remaining budget, and TimeoutExceeded is raised once it is spent.
    """
    if interval <= 0:
        raise ValueError(f"Polling interval must be positive, got {interval}")

    start = clock()
    attempt = 0
    last_state: Any = None
    last_error: Optional[BaseException] = None

    while True:
        attempt += 1
        try:
            last_state = query()
            if predicate(last_state):
                return last_state
            last_error = None
        except Exception as e:
            last_error = e
            logger.debug(f"Attempt {attempt} for '{description}' raised: {e}")

        elapsed_ms = (clock() - start) * 1000
        if elapsed_ms >= timeout:
            raise TimeoutExceeded(
                description=description,
                last_state=last_state,
                last_error=last_error,
                attempts=attempt,
                elapsed_ms=elapsed_ms,
                timeout_ms=timeout,
            )

        sleep(min(interval, timeout - elapsed_ms) / 1000)


__all__ = [
    "AmbiguousFallback",
    "Condition",
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_TIMEOUT_MS",
    "PollingAssertion",
    "PollingAssertionError",
    "TimeoutExceeded",
    "wait_until",
]
