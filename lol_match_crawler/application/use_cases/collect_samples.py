"""Use case for collecting match samples from one region."""
from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional, Sequence

from lol_match_crawler.core.logging import get_logger
from lol_match_crawler.domain.entities import CrawlResult
from lol_match_crawler.domain.enums import CrawlStatus, QueueType, Region
from lol_match_crawler.domain.interfaces import ISampleSink
from lol_match_crawler.infrastructure import MatchRepository, RiotAPIClient
from lol_match_crawler.infrastructure.api import AuthRejected, ProviderUnavailable
from lol_match_crawler.application.services.crawler import CrawlController, ProgressCallback
from lol_match_crawler.application.services.extractor import MatchExtractor
from lol_match_crawler.application.services.seed import SeedDiscoveryService

logger = get_logger(__name__, service="collect")


class CollectSamplesUseCase:
    """
    Wires the API client, seed discovery and crawl controller for one run.

    Seeds given by the caller are resolved (Riot IDs -> PUUIDs); when none
    are given, the region's apex ladder supplies them. A provider failure
    while seeding is reported as a FAILED run, like one during the crawl.
    """

    def __init__(
        self,
        api_client: RiotAPIClient,
        region: Region,
        *,
        target: int,
        max_depth: Optional[int] = None,
        eligible_queues: Optional[Sequence[int]] = None,
        matches_per_player: int = 20,
        max_concurrency: int = 1,
        seed_discovery_count: int = 25,
    ):
        self.api_client = api_client
        self.region = region
        self.target = target
        self.max_depth = max_depth
        self.eligible_queues = list(eligible_queues or [q.queue_id for q in QueueType.ranked_queues()])
        self.matches_per_player = matches_per_player
        self.max_concurrency = max_concurrency
        self.seed_discovery_count = seed_discovery_count
        self.seed_service = SeedDiscoveryService(api_client, region)

    def _discovery_queue(self) -> QueueType:
        for queue_id in self.eligible_queues:
            queue = QueueType.from_queue_id(queue_id)
            if queue is not None and queue.is_ranked:
                return queue
        return QueueType.RANKED_SOLO_5x5

    async def _seed_puuids(self, seeds: Iterable[str]) -> List[str]:
        seeds = list(seeds)
        if seeds:
            return await self.seed_service.resolve_seeds(seeds)
        logger.info("no seeds configured, discovering from the apex ladder")
        return await self.seed_service.discover_seed_puuids(self._discovery_queue(), self.seed_discovery_count)

    async def execute(
        self,
        seeds: Iterable[str],
        sink: ISampleSink,
        *,
        cancel_event: Optional[asyncio.Event] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> CrawlResult:
        try:
            puuids = await self._seed_puuids(seeds)
        except (AuthRejected, ProviderUnavailable) as exc:
            logger.error(f"seeding failed: {type(exc).__name__}: {exc}")
            return CrawlResult(status=CrawlStatus.FAILED, emitted=0, target=self.target, error=exc)

        controller = CrawlController(
            MatchRepository(self.api_client, self.region, self.eligible_queues),
            MatchExtractor(self.eligible_queues),
            sink,
            target=self.target,
            max_depth=self.max_depth,
            matches_per_player=self.matches_per_player,
            max_concurrency=self.max_concurrency,
            cancel_event=cancel_event,
            progress_callback=progress_callback,
        )
        return await controller.run(puuids)
