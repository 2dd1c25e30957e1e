from __future__ import annotations

from typing import Iterable, List

from lol_match_crawler.core.logging import get_logger
from lol_match_crawler.domain.enums import QueueType, Rank, Region
from lol_match_crawler.infrastructure.api import RiotAPIClient

logger = get_logger(__name__, service="seed")


class SeedDiscoveryService:
    """
    Produces the PUUIDs a crawl starts from.

    Caller-supplied seeds may be raw PUUIDs or Riot IDs (``name#tag``), the
    latter resolved through account-v1. Without seeds, the apex ladders
    (challenger, then grandmaster, then master) of the region are read and
    their highest-LP players used.

    Provider errors are not swallowed here: an ``AuthRejected`` during
    seeding must end the run exactly like one during the crawl.
    """

    def __init__(self, api_client: RiotAPIClient, region: Region) -> None:
        self.api_client = api_client
        self.region = region

    async def resolve_seeds(self, seeds: Iterable[str]) -> List[str]:
        puuids: List[str] = []
        for seed in seeds:
            seed = seed.strip()
            if not seed:
                continue
            if "#" not in seed:
                puuids.append(seed)
                continue
            game_name, _, tag_line = seed.rpartition("#")
            account = await self.api_client.get_account_by_riot_id(self.region, game_name, tag_line)
            puuid = (account or {}).get("puuid")
            if puuid:
                puuids.append(puuid)
            else:
                logger.warning(f"seed {seed!r} did not resolve to an account, skipping")
        return _unique(puuids)

    async def discover_seed_puuids(self, queue_type: QueueType, count: int = 25) -> List[str]:
        puuids: List[str] = []
        for tier in Rank.apex_tiers():
            league = await self.api_client.get_apex_league(self.region, queue_type, tier)
            if not league:
                continue
            entries = [e for e in league.get("entries", []) if isinstance(e, dict)]
            entries.sort(key=lambda e: e.get("leaguePoints", 0), reverse=True)
            for e in entries:
                puuid = e.get("puuid")
                if puuid:
                    puuids.append(puuid)
            puuids = _unique(puuids)
            if len(puuids) >= count:
                break
        logger.info(f"discovered {min(len(puuids), count)} seed players in {self.region.value}")
        return puuids[:count]


def _unique(items: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered
