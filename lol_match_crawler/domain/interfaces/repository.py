"""Repository interfaces the crawl controller depends on."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IMatchRepository(ABC):
    """Read access to match history, bound to one region.

    Implementations resolve quota and transient failures themselves; only
    unrecoverable conditions (``AuthRejected``, ``ProviderUnavailable``)
    escape these methods.
    """

    @abstractmethod
    async def get_recent_match_ids(self, puuid: str, limit: int) -> List[str]:
        """Most-recent-first match IDs of a player; empty when none are available."""
        pass

    @abstractmethod
    async def get_match(self, match_id: str) -> Optional[Dict[str, Any]]:
        """Raw match record, or None when the provider has no data for it."""
        pass
