"""
FPL ingest error taxonomy.

Transport failures are wrapped as they travel up the stack:
NetworkError -> RetryExhaustedError -> AllProxiesFailedError -> OrchestrationError.
"""

from typing import List, Optional, Tuple


class FPLError(Exception):
    """Base class for all FPL pipeline errors."""


class NetworkError(FPLError):
    """A single HTTP attempt failed (non-2xx, connection error or bad JSON)."""

    def __init__(self, status: Optional[int], message: str):
        self.status = status
        self.message = message
        super().__init__(f"[{status if status is not None else 'no status'}] {message}")


class RetryExhaustedError(FPLError):
    """Every attempt against one proxy failed."""

    def __init__(self, last_error: Exception, attempts: int):
        self.last_error = last_error
        self.attempts = attempts
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


class AllProxiesFailedError(FPLError):
    """Every configured proxy exhausted its retry budget."""

    def __init__(self, failures: List[Tuple[str, RetryExhaustedError]]):
        self.failures = failures
        summary = "; ".join(f"{proxy or 'direct'}: {error}" for proxy, error in failures)
        super().__init__(f"All {len(failures)} proxies failed ({summary})")


class EmptyHistoryError(FPLError):
    """No team in the league yielded any gameweek history."""


class OrchestrationError(FPLError):
    """The league fetch could not produce a usable result."""


class InvalidLeagueDataError(FPLError, ValueError):
    """Upstream payload or caller input is structurally invalid."""
