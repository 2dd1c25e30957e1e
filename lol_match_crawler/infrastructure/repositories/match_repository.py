"""Match repository implementation."""
from typing import Any, Dict, Iterable, List, Optional

from lol_match_crawler.core.logging import get_logger
from lol_match_crawler.domain.enums import Region, QueueType
from lol_match_crawler.domain.interfaces import IMatchRepository
from lol_match_crawler.infrastructure.api import RiotAPIClient

logger = get_logger(__name__, service="match-repo")


class MatchRepository(IMatchRepository):
    """Match history of one region, backed by the Riot API client."""

    def __init__(
        self,
        api_client: RiotAPIClient,
        region: Region,
        eligible_queues: Optional[Iterable[int]] = None,
    ):
        """
        Initialize match repository.

        Args:
            api_client: Riot API client instance
            region: Region whose match-v5 routing is queried
            eligible_queues: Queue ids worth listing; narrows the id query
                server-side where the API allows it
        """
        self.api_client = api_client
        self.region = region
        self.eligible_queues = frozenset(eligible_queues or ())

    def _id_filters(self) -> Dict[str, Any]:
        """The ids endpoint takes a single queue, or type=ranked for all ranked queues."""
        if len(self.eligible_queues) == 1:
            return {"queue": next(iter(self.eligible_queues))}
        ranked_ids = {q.queue_id for q in QueueType.ranked_queues()}
        if self.eligible_queues and self.eligible_queues <= ranked_ids:
            return {"match_type": "ranked"}
        return {}

    async def get_recent_match_ids(self, puuid: str, limit: int) -> List[str]:
        """Get match IDs for a player, most recent first."""
        return await self.api_client.get_match_ids_by_puuid(
            region=self.region,
            puuid=puuid,
            count=limit,
            **self._id_filters(),
        )

    async def get_match(self, match_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a single raw match record by ID.

        Returns:
            The match-v5 payload, or None if the API has no data for it
        """
        match_data = await self.api_client.get_match_by_id(self.region, match_id)
        if match_data is None:
            logger.warning(f"Match {match_id} not found in API")
        return match_data
