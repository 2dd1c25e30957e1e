from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from lol_match_crawler.core.logging import StructuredLogger
from .errors import ProviderUnavailable, RateLimited, TransientProviderError


Supplier = Callable[[], Awaitable[Any]]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(slots=True)
class RetryPolicy:
    """Retry loop for a single provider request.

    Two independent budgets: ``max_rate_limit_retries`` for 429 answers
    (the wait comes from the provider's Retry-After) and ``max_retries`` for
    transient failures (exponential backoff, capped). Exhausting either one
    raises ``ProviderUnavailable``; any other exception propagates untouched.
    Budgets count retries, so a request is sent at most ``budget + 1`` times.
    """

    max_retries: int = 3
    max_rate_limit_retries: int = 5
    backoff_base_s: float = 1.0
    backoff_factor: float = 2.0
    backoff_max_s: float = 30.0
    sleep: Sleep = field(default=asyncio.sleep, repr=False, compare=False)

    @classmethod
    def from_settings(cls, settings: Any, *, sleep: Sleep = asyncio.sleep) -> "RetryPolicy":
        return cls(
            max_retries=settings.MAX_RETRIES,
            max_rate_limit_retries=settings.MAX_RATE_LIMIT_RETRIES,
            backoff_base_s=settings.RETRY_BACKOFF_BASE_S,
            backoff_factor=settings.RETRY_BACKOFF_FACTOR,
            backoff_max_s=settings.RETRY_BACKOFF_MAX_S,
            sleep=sleep,
        )

    def backoff_for(self, failures: int) -> float:
        """Delay after the ``failures``-th consecutive transient failure (1-based)."""
        delay = self.backoff_base_s * (self.backoff_factor ** (failures - 1))
        return min(delay, self.backoff_max_s)

    async def run(
        self,
        supplier: Supplier,
        *,
        logger: StructuredLogger,
        context: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Execute an async supplier, retrying rate-limit and transient errors."""
        transient_failures = 0
        rate_limited = 0
        while True:
            try:
                return await supplier()
            except RateLimited as e:
                rate_limited += 1
                if rate_limited > self.max_rate_limit_retries:
                    raise ProviderUnavailable(
                        f"still rate limited after {self.max_rate_limit_retries} retries",
                        status_code=e.status_code,
                        url=e.url,
                    ) from e
                logger.warning(
                    lambda: f"rate-limited, retrying in {e.retry_after_s:.1f}s",
                    extra={"context": {**(context or {}), "retry": rate_limited}},
                )
                await self.sleep(e.retry_after_s)
            except TransientProviderError as e:
                transient_failures += 1
                if transient_failures > self.max_retries:
                    raise ProviderUnavailable(
                        f"gave up after {self.max_retries} retries ({transient_failures} attempts): {e}",
                        status_code=e.status_code,
                        url=e.url,
                    ) from e
                delay = self.backoff_for(transient_failures)
                logger.warning(
                    lambda: f"transient error ({e}), retrying in {delay:.1f}s",
                    extra={"context": {**(context or {}), "attempt": transient_failures}},
                )
                await self.sleep(delay)
