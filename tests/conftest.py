"""Pytest configuration and fixtures for crawler tests.

This module provides:
- Builders for raw match-v5 records
- An in-memory player/match graph behind the repository interface
- An in-memory sample sink
- A fake clock whose sleep advances time instead of waiting
- A mock Riot API behind httpx.MockTransport
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx
import pytest

from lol_match_crawler.config import Settings
from lol_match_crawler.domain.interfaces import IMatchRepository, ISampleSink
from lol_match_crawler.infrastructure.api import EndpointRateLimiter, RateLimiter, RetryPolicy, RiotAPIClient


POSITIONS = ["TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY"]


# =============================================================================
# RAW MATCH RECORDS
# =============================================================================

def build_participant(puuid: str, slot: int, *, team_id: int, win: bool, champion_id: int) -> Dict[str, Any]:
    return {
        "puuid": puuid,
        "teamId": team_id,
        "championId": champion_id,
        "championName": f"Champion{champion_id}",
        "teamPosition": POSITIONS[slot % 5],
        "summoner1Id": 4,
        "summoner2Id": 14 if slot % 5 != 1 else 11,
        "summonerLevel": 100 + slot,
        "win": win,
        "gameEndedInEarlySurrender": False,
        "perks": {
            "styles": [
                {"description": "primaryStyle", "style": 8000, "selections": [{"perk": 8010}, {"perk": 9111}]},
                {"description": "subStyle", "style": 8400, "selections": [{"perk": 8446}]},
            ]
        },
    }


def build_match(
    match_id: str,
    puuids: Optional[Sequence[str]] = None,
    *,
    queue_id: int = 420,
    blue_win: bool = True,
    **info_overrides: Any,
) -> Dict[str, Any]:
    """A finished 5v5 match-v5 record; the first five players are blue side."""
    puuids = list(puuids or [f"{match_id}-player{i}" for i in range(10)])
    participants = [
        build_participant(
            puuid,
            slot,
            team_id=100 if slot < 5 else 200,
            win=blue_win if slot < 5 else not blue_win,
            champion_id=slot + 1,
        )
        for slot, puuid in enumerate(puuids)
    ]
    info = {
        "queueId": queue_id,
        "gameVersion": "14.3.555.1234",
        "gameEndTimestamp": 1_700_000_000_000,
        "endOfGameResult": "GameComplete",
        "participants": participants,
        "teams": [
            {
                "teamId": 100,
                "win": blue_win,
                "bans": [{"championId": 50 + turn, "pickTurn": turn} for turn in range(1, 6)],
            },
            {
                "teamId": 200,
                "win": not blue_win,
                "bans": [{"championId": 60 + turn, "pickTurn": turn} for turn in range(6, 11)],
            },
        ],
    }
    info.update(info_overrides)
    return {"metadata": {"matchId": match_id, "participants": puuids}, "info": info}


@pytest.fixture
def make_match() -> Callable[..., Dict[str, Any]]:
    return build_match


# =============================================================================
# IN-MEMORY PROVIDER
# =============================================================================

class MatchGraph:
    """Players and the matches connecting them, served the way the provider does."""

    def __init__(self) -> None:
        self.histories: Dict[str, List[str]] = {}
        self.matches: Dict[str, Optional[Dict[str, Any]]] = {}

    def add_match(self, match_id: str, puuids: Sequence[str], **kwargs: Any) -> Dict[str, Any]:
        raw = build_match(match_id, puuids, **kwargs)
        self.matches[match_id] = raw
        for puuid in puuids:
            self.histories.setdefault(puuid, []).append(match_id)
        return raw

    def add_missing_match(self, match_id: str, puuids: Sequence[str]) -> None:
        """Listed in histories but 404 when fetched."""
        self.matches[match_id] = None
        for puuid in puuids:
            self.histories.setdefault(puuid, []).append(match_id)


class FakeRepository(IMatchRepository):
    """Serves a :class:`MatchGraph`; records every call it receives."""

    def __init__(self, graph: MatchGraph) -> None:
        self.graph = graph
        self.expanded: List[str] = []
        self.fetched: List[str] = []
        self.history_error: Optional[BaseException] = None
        self.match_errors: Dict[str, BaseException] = {}

    async def get_recent_match_ids(self, puuid: str, limit: int) -> List[str]:
        self.expanded.append(puuid)
        if self.history_error is not None:
            raise self.history_error
        return list(self.graph.histories.get(puuid, []))[:limit]

    async def get_match(self, match_id: str) -> Optional[Dict[str, Any]]:
        self.fetched.append(match_id)
        if match_id in self.match_errors:
            raise self.match_errors[match_id]
        return self.graph.matches.get(match_id)


class ListSink(ISampleSink):
    """Keeps samples in memory; raises OSError once ``fail_after`` rows were written."""

    def __init__(self, fail_after: Optional[int] = None) -> None:
        self.samples: List[Any] = []
        self.fail_after = fail_after
        self.closed = False

    def write(self, sample) -> None:
        if self.fail_after is not None and len(self.samples) >= self.fail_after:
            raise OSError(28, "No space left on device")
        self.samples.append(sample)

    def close(self) -> None:
        self.closed = True

    @property
    def match_ids(self) -> List[str]:
        return [s.match_id for s in self.samples]


@pytest.fixture
def graph() -> MatchGraph:
    return MatchGraph()


@pytest.fixture
def repository(graph) -> FakeRepository:
    return FakeRepository(graph)


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


# =============================================================================
# TIME
# =============================================================================

class FakeClock:
    """Monotonic clock for the rate limiter and retry policy; ``sleep`` just moves it."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def full_disk_sink() -> ListSink:
    return ListSink(fail_after=1)


# =============================================================================
# MOCK RIOT API (httpx transport)
# =============================================================================

class FakeRiotAPI:
    """``httpx.MockTransport`` handler serving a :class:`MatchGraph` over the real routes."""

    def __init__(self, graph: MatchGraph) -> None:
        self.graph = graph
        self.accounts: Dict[str, str] = {}
        self.leagues: Dict[str, List[Dict[str, Any]]] = {}
        self.forced_status: Optional[int] = None
        self.paths: List[str] = []

    def __call__(self, request):
        path = request.url.path
        self.paths.append(path)
        if self.forced_status is not None:
            return httpx.Response(self.forced_status)

        parts = path.strip("/").split("/")
        if path.startswith("/lol/match/v5/matches/by-puuid/"):
            count = int(request.url.params.get("count", 20))
            return httpx.Response(200, json=self.graph.histories.get(parts[5], [])[:count])
        if path.startswith("/lol/match/v5/matches/"):
            raw = self.graph.matches.get(parts[4])
            return httpx.Response(200, json=raw) if raw is not None else httpx.Response(404)
        if path.startswith("/riot/account/v1/accounts/by-riot-id/"):
            riot_id = f"{parts[5]}#{parts[6]}"
            if riot_id not in self.accounts:
                return httpx.Response(404)
            return httpx.Response(200, json={"puuid": self.accounts[riot_id], "gameName": parts[5], "tagLine": parts[6]})
        if path.startswith("/lol/league/v4/"):
            tier = parts[3].replace("leagues", "")
            if tier not in self.leagues:
                return httpx.Response(404)
            return httpx.Response(200, json={"tier": tier.upper(), "entries": self.leagues[tier]})
        return httpx.Response(404)


@pytest.fixture
def riot_api(graph) -> FakeRiotAPI:
    return FakeRiotAPI(graph)


@pytest.fixture
def api_client(riot_api, fake_clock):
    """A real client over the mock transport; enter it with ``async with``."""
    return RiotAPIClient(
        "RGAPI-test",
        rate_limiter=RateLimiter(((18, 1.0), (90, 120.0)), clock=fake_clock, sleep=fake_clock.sleep),
        endpoint_limiter=EndpointRateLimiter.from_settings(Settings, clock=fake_clock, sleep=fake_clock.sleep),
        retry_policy=RetryPolicy(max_retries=1, max_rate_limit_retries=1, sleep=fake_clock.sleep),
        transport=httpx.MockTransport(riot_api),
    )
