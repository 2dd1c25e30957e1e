"""Rate limiters matching the Riot API's application and method limits."""
from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, List, Optional, Sequence, Tuple

from lol_match_crawler.core.logging import get_logger

logger = get_logger(__name__, service="rate-limiter")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


class _Window:
    __slots__ = ("limit", "seconds", "times")

    def __init__(self, limit: int, seconds: float) -> None:
        if limit < 1 or seconds <= 0:
            raise ValueError(f"Invalid rate-limit window {limit}:{seconds}")
        self.limit = limit
        self.seconds = seconds
        self.times: Deque[float] = deque()

    def prune(self, now: float) -> None:
        while self.times and now - self.times[0] > self.seconds:
            self.times.popleft()

    def has_room(self) -> bool:
        return len(self.times) < self.limit

    def wait_time(self, now: float) -> float:
        return self.seconds - (now - self.times[0])


class RateLimiter:
    """
    Sliding-log rate limiter over any number of windows.

    Riot publishes its limits as "limit:seconds" pairs (X-App-Rate-Limit:
    ``20:1,100:120``); a request is admitted only when every window has
    room, and its timestamp is then recorded in all of them. Every HTTP
    attempt must pass through :meth:`acquire`, retries included.
    """

    _SLACK_S = 0.01

    def __init__(
        self,
        windows: Sequence[Tuple[int, float]] = ((18, 1.0), (90, 120.0)),
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ):
        if not windows:
            raise ValueError("RateLimiter needs at least one window")
        self._windows: List[_Window] = [_Window(limit, seconds) for limit, seconds in windows]
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()

    @classmethod
    def from_header(cls, header: str, **kwargs) -> "RateLimiter":
        """Build from the provider's header format, e.g. ``"18:1,90:120"``."""
        return cls(parse_rate_limit_header(header), **kwargs)

    @property
    def windows(self) -> List[Tuple[int, float]]:
        return [(w.limit, w.seconds) for w in self._windows]

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = self._clock()
                for window in self._windows:
                    window.prune(now)

                blocked = [w for w in self._windows if not w.has_room()]
                if not blocked:
                    for window in self._windows:
                        window.times.append(now)
                    return

                wait = max(w.wait_time(now) for w in blocked) + self._SLACK_S
                logger.debug(lambda: f"rate-limit wait {wait:.2f}s")
                await self._sleep(wait)

    def adopt(
        self,
        windows: Sequence[Tuple[int, float]],
        counts: Optional[Sequence[Tuple[int, float]]] = None,
    ) -> None:
        """Switch to the windows the provider reports, keeping requests already sent.

        ``counts`` are the provider's own per-window usage (the
        ``X-...-Rate-Limit-Count`` header). When it has seen more requests
        than we recorded, the difference is booked at the current instant.
        """
        if not windows:
            raise ValueError("RateLimiter needs at least one window")
        now = self._clock()
        by_seconds = {w.seconds: w for w in self._windows}
        longest = max(self._windows, key=lambda w: w.seconds)
        used = {seconds: count for count, seconds in (counts or ())}

        adopted: List[_Window] = []
        for limit, seconds in windows:
            window = _Window(limit, seconds)
            source = by_seconds.get(seconds, longest)
            window.times.extend(t for t in source.times if now - t <= seconds)
            missing = used.get(seconds, 0) - len(window.times)
            if missing > 0:
                window.times.extend([now] * missing)
            adopted.append(window)

        if [(w.limit, w.seconds) for w in adopted] != self.windows:
            logger.info(lambda: f"adopting provider rate limits {_format_windows(adopted)}")
        self._windows = adopted

    def get_status(self) -> List[Tuple[int, int, float]]:
        """(used, limit, seconds) per window at the current instant."""
        now = self._clock()
        return [
            (sum(1 for t in w.times if now - t <= w.seconds), w.limit, w.seconds)
            for w in self._windows
        ]


def parse_rate_limit_header(header: str) -> List[Tuple[int, float]]:
    """Parse ``"limit:seconds,limit:seconds"`` into (limit, seconds) pairs."""
    windows: List[Tuple[int, float]] = []
    for item in header.split(","):
        item = item.strip()
        if not item:
            continue
        limit, sep, seconds = item.partition(":")
        if not sep:
            raise ValueError(f"Could not parse rate limit string: {header!r}")
        try:
            windows.append((int(limit), float(seconds)))
        except ValueError as exc:
            raise ValueError(f"Could not parse rate limit string: {header!r}") from exc
    if not windows:
        raise ValueError(f"Could not parse rate limit string: {header!r}")
    return windows


def _format_windows(windows: Sequence[_Window]) -> str:
    return ",".join(f"{w.limit}:{w.seconds:g}" for w in windows)


class EndpointRateLimiter:
    """Per-endpoint (method) rate limiters, keyed by API family.

    Riot enforces a method limit for each endpoint on top of the
    application limit. Endpoints without a limiter of their own only wait
    on the application limiter.
    """

    def __init__(self, *, clock: Clock = time.monotonic, sleep: Sleep = asyncio.sleep):
        self.limiters: Dict[str, RateLimiter] = {}
        self._clock = clock
        self._sleep = sleep

    @classmethod
    def from_settings(cls, s, **kwargs) -> "EndpointRateLimiter":
        limiter = cls(**kwargs)
        limiter.add_endpoint_limiter("match", parse_rate_limit_header(s.MATCH_RATE_LIMITS))
        limiter.add_endpoint_limiter("account", parse_rate_limit_header(s.ACCOUNT_RATE_LIMITS))
        limiter.add_endpoint_limiter("league", parse_rate_limit_header(s.LEAGUE_RATE_LIMITS))
        return limiter

    def add_endpoint_limiter(self, endpoint: str, windows: Sequence[Tuple[int, float]]) -> None:
        self.limiters[endpoint] = RateLimiter(windows, clock=self._clock, sleep=self._sleep)

    def get(self, endpoint: str) -> Optional[RateLimiter]:
        return self.limiters.get(endpoint)

    async def acquire(self, endpoint: str) -> None:
        limiter = self.limiters.get(endpoint)
        if limiter:
            await limiter.acquire()

    def adopt(
        self,
        endpoint: str,
        windows: Sequence[Tuple[int, float]],
        counts: Optional[Sequence[Tuple[int, float]]] = None,
    ) -> None:
        limiter = self.limiters.get(endpoint)
        if limiter is None:
            self.add_endpoint_limiter(endpoint, windows)
            limiter = self.limiters[endpoint]
        limiter.adopt(windows, counts)
