"""
FPL Retry, Proxy Fallback and Request Pacing

This module keeps the pipeline polite towards the upstream API: bounded
retries with linear backoff, an ordered list of proxies to fall back through,
and fixed pauses between requests.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from utils.constants import MAX_ATTEMPTS, RETRY_BASE_DELAY, SETTLE_DELAY, TEAM_DELAY
from .errors import AllProxiesFailedError, NetworkError, RetryExhaustedError
from .transport import Transport

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryOutcome:
    """Tagged result of a retried call."""
    ok: bool
    attempts: int
    value: Any = None
    error: Optional[Exception] = None


class RetryPolicy:
    """Retries one logical request with linear backoff."""

    def __init__(self, max_attempts: int = MAX_ATTEMPTS, base_delay: float = RETRY_BASE_DELAY,
                 sleep: Optional[Sleep] = None):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.sleep = sleep or asyncio.sleep

        logger.debug(f"Initialized retry policy: max_attempts={max_attempts}, "
                     f"base_delay={base_delay}s")

    def delay(self, attempt: int) -> float:
        """Backoff before the attempt following ``attempt`` (1-based)."""
        return self.base_delay * attempt

    async def attempt(self, call: Callable[[], Awaitable[Any]]) -> RetryOutcome:
        """
        Run ``call`` until it succeeds or the attempt budget is spent.

        Args:
            call: Zero-argument coroutine factory, invoked once per attempt

        Returns:
            RetryOutcome carrying either the value or the last error
        """
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                value = await call()
                return RetryOutcome(ok=True, attempts=attempt, value=value)
            except NetworkError as e:
                last_error = e
                if attempt < self.max_attempts:
                    wait = self.delay(attempt)
                    logger.warning(f"Attempt {attempt} failed: {e}. Retrying in {wait:.2f}s...")
                    await self.sleep(wait)
                else:
                    logger.warning(f"All {self.max_attempts} attempts failed. Last error: {e}")
        return RetryOutcome(ok=False, attempts=self.max_attempts, error=last_error)

    async def run(self, call: Callable[[], Awaitable[Any]]) -> Any:
        """
        Like :meth:`attempt` but raises instead of returning a failed outcome.

        Raises:
            RetryExhaustedError: If every attempt failed
        """
        outcome = await self.attempt(call)
        if not outcome.ok:
            raise RetryExhaustedError(outcome.error, outcome.attempts)
        return outcome.value


class ProxyFallback:
    """Tries each proxy in order, each with a full retry budget."""

    def __init__(self, transport: Transport, proxies: Sequence[str], retry_policy: RetryPolicy):
        if not proxies:
            raise ValueError("At least one proxy entry is required ('' for direct fetch)")
        self.transport = transport
        self.proxies = list(proxies)
        self.retry_policy = retry_policy

    async def fetch_via_any_proxy(self, target_url: str) -> Any:
        """
        Fetch ``target_url`` through the first proxy that succeeds.

        Raises:
            AllProxiesFailedError: With every proxy's RetryExhaustedError
        """
        failures: List[Tuple[str, RetryExhaustedError]] = []
        for proxy in self.proxies:
            outcome = await self.retry_policy.attempt(
                lambda proxy=proxy: self.transport.get(target_url, proxy=proxy)
            )
            if outcome.ok:
                if failures:
                    logger.info(f"Fetched {target_url} via {proxy or 'direct'} "
                                f"after {len(failures)} failed proxies")
                return outcome.value
            logger.warning(f"Proxy {proxy or 'direct'} exhausted for {target_url}")
            failures.append((proxy, RetryExhaustedError(outcome.error, outcome.attempts)))

        logger.error(f"All {len(failures)} proxies failed for {target_url}")
        raise AllProxiesFailedError(failures)


class RequestPacer:
    """Fixed pauses separating the standings request from the per-team burst."""

    def __init__(self, settle_delay: float = SETTLE_DELAY, team_delay: float = TEAM_DELAY,
                 sleep: Optional[Sleep] = None):
        self.settle_delay = settle_delay
        self.team_delay = team_delay
        self.sleep = sleep or asyncio.sleep
        self.total_waited = 0.0

    async def _wait(self, seconds: float) -> None:
        if seconds > 0:
            await self.sleep(seconds)
            self.total_waited += seconds

    async def settle(self) -> None:
        await self._wait(self.settle_delay)

    async def before_team(self) -> None:
        await self._wait(self.team_delay)
