"""Riot Games API client."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from lol_match_crawler.config import settings
from lol_match_crawler.core.logging import get_logger
from lol_match_crawler.domain.enums import QueueType, Rank, Region
from .errors import AuthRejected, RateLimited, TransientProviderError
from .rate_limiter import EndpointRateLimiter, RateLimiter, Sleep, parse_rate_limit_header
from .retry_policy import RetryPolicy

logger = get_logger(__name__, service="riot-api")

_DEFAULT_RETRY_AFTER_S = 5.0
_MAX_IDS_PER_CALL = 100


class RiotAPIClient:
    """Asynchronous Riot API client; the only component that touches the network.

    Every attempt waits on its endpoint's method limiter and on the shared
    application :class:`RateLimiter` first; limits the provider reports in
    its response headers replace the configured ones. Quota and
    transient failures are retried by the :class:`RetryPolicy`; 404 becomes
    an empty result and 401/403 raise ``AuthRejected`` straight away.
    """

    def __init__(
        self,
        api_key: str,
        *,
        rate_limiter: Optional[RateLimiter] = None,
        endpoint_limiter: Optional[EndpointRateLimiter] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.api_key = api_key
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.requests_sent = 0
        self._transport = transport
        self.rate_limiter = rate_limiter or RateLimiter.from_header(settings.APP_RATE_LIMITS, sleep=sleep)
        self.endpoint_limiter = endpoint_limiter or EndpointRateLimiter.from_settings(settings, sleep=sleep)
        self.adopt_rate_limit_headers = settings.ADOPT_RATE_LIMIT_HEADERS
        self.retry_policy = retry_policy or RetryPolicy.from_settings(settings, sleep=sleep)

    async def __aenter__(self) -> "RiotAPIClient":
        self.session = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Riot-Token": self.api_key},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_) -> None:
        if self.session:
            await self.session.aclose()
            self.session = None

    @staticmethod
    def _get_platform_url(region: Region) -> str:
        return f"https://{region.platform_route}.api.riotgames.com"

    @staticmethod
    def _get_regional_url(region: Region) -> str:
        return f"https://{region.regional_route}.api.riotgames.com"

    async def _make_request(
        self, url: str, params: Optional[Dict[str, Any]] = None, *, endpoint: str = "match"
    ) -> Optional[Any]:
        """GET ``url`` with rate limiting and retries; None when the provider has no data."""
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")
        return await self.retry_policy.run(
            lambda: self._send_once(url, params, endpoint),
            logger=logger,
            context={"url": url, "endpoint": endpoint},
        )

    async def _send_once(self, url: str, params: Optional[Dict[str, Any]], endpoint: str) -> Optional[Any]:
        await self.endpoint_limiter.acquire(endpoint)
        await self.rate_limiter.acquire()
        self.requests_sent += 1
        try:
            response = await self.session.get(url, params=params)
        except httpx.TimeoutException as exc:
            raise TransientProviderError(f"timeout: {exc!r}", url=url) from exc
        except httpx.TransportError as exc:
            raise TransientProviderError(f"network error: {exc!r}", url=url) from exc

        status = response.status_code

        if status == 200:
            if self.adopt_rate_limit_headers:
                self._adopt_rate_limits(response.headers, endpoint)
            try:
                return response.json()
            except ValueError as exc:
                raise TransientProviderError(f"malformed JSON body: {exc}", status_code=status, url=url) from exc

        if status in (401, 403):
            logger.error(lambda: f"{status} from provider; check RIOT_API_KEY")
            raise AuthRejected(f"HTTP {status}: API key rejected", status_code=status, url=url)

        if status == 404:
            logger.debug(lambda: f"404 no data for {url}")
            return None

        if status == 429:
            raise RateLimited(
                "HTTP 429",
                retry_after_s=_parse_retry_after(response.headers.get("Retry-After")),
                url=url,
            )

        if status >= 500:
            raise TransientProviderError(f"HTTP {status}", status_code=status, url=url)

        logger.warning(lambda: f"HTTP {status} for {url}, treating as no data")
        return None

    def _adopt_rate_limits(self, headers: httpx.Headers, endpoint: str) -> None:
        """Follow the limits the provider says apply to this key and endpoint."""
        for prefix, apply in (
            ("X-App-Rate-Limit", self.rate_limiter.adopt),
            ("X-Method-Rate-Limit", lambda w, c: self.endpoint_limiter.adopt(endpoint, w, c)),
        ):
            limits = headers.get(prefix)
            if not limits:
                continue
            try:
                windows = parse_rate_limit_header(limits)
                counts = headers.get(f"{prefix}-Count")
                apply(windows, parse_rate_limit_header(counts) if counts else None)
            except ValueError as exc:
                logger.warning(lambda: f"ignoring malformed {prefix} header {limits!r}: {exc}")

    # ── Match API ──────────────────────────────────────────────────────

    async def get_match_ids_by_puuid(
        self,
        region: Region,
        puuid: str,
        count: int = 20,
        queue: Optional[int] = None,
        match_type: Optional[str] = None,
        start: int = 0,
    ) -> List[str]:
        """Most-recent-first match IDs of a player; [] when the history is unavailable."""
        params: Dict[str, Any] = {"start": start, "count": max(1, min(count, _MAX_IDS_PER_CALL))}
        if queue is not None:
            params["queue"] = queue
        if match_type:
            params["type"] = match_type
        url = f"{self._get_regional_url(region)}/lol/match/v5/matches/by-puuid/{quote(puuid, safe='')}/ids"
        result = await self._make_request(url, params)
        return [str(m) for m in result] if isinstance(result, list) else []

    async def get_match_by_id(self, region: Region, match_id: str) -> Optional[Dict[str, Any]]:
        url = f"{self._get_regional_url(region)}/lol/match/v5/matches/{quote(match_id, safe='')}"
        result = await self._make_request(url)
        return result if isinstance(result, dict) else None

    # ── Account API ────────────────────────────────────────────────────

    async def get_account_by_riot_id(
        self, region: Region, game_name: str, tag_line: str
    ) -> Optional[Dict[str, Any]]:
        url = (
            f"{self._get_regional_url(region)}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )
        result = await self._make_request(url, endpoint="account")
        return result if isinstance(result, dict) else None

    # ── League API ─────────────────────────────────────────────────────

    async def get_apex_league(self, region: Region, queue: QueueType, tier: Rank) -> Optional[Dict[str, Any]]:
        url = f"{self._get_platform_url(region)}/lol/league/v4/{tier.league_path}/by-queue/{queue.api_queue_name}"
        result = await self._make_request(url, endpoint="league")
        return result if isinstance(result, dict) else None


def _parse_retry_after(value: Optional[str]) -> float:
    if not value:
        return _DEFAULT_RETRY_AFTER_S
    try:
        seconds = float(value)
    except ValueError:
        return _DEFAULT_RETRY_AFTER_S
    return seconds if seconds >= 0 else _DEFAULT_RETRY_AFTER_S
