"""Queue type enumeration for sampled matches."""
from enum import Enum
from typing import Optional


class QueueType(Enum):
    """Summoner's Rift queues the crawler knows how to sample.

    Provides:
    - queue_id: numeric queue id carried by match records
    - api_queue_name: string used by league endpoints (ranked only)
    """

    RANKED_SOLO_5x5 = 420  # Solo/Duo Queue
    RANKED_FLEX_SR = 440   # Flex 5v5 Queue
    NORMAL_DRAFT = 400
    NORMAL_BLIND = 430

    @property
    def queue_id(self) -> int:
        """Get queue ID for API calls."""
        return self.value

    @property
    def is_ranked(self) -> bool:
        return self in (QueueType.RANKED_SOLO_5x5, QueueType.RANKED_FLEX_SR)

    @property
    def api_queue_name(self) -> str:
        """Get queue name string used in /league endpoints."""
        if not self.is_ranked:
            raise ValueError(f"{self.name} has no league ladder")
        return "RANKED_SOLO_5x5" if self == QueueType.RANKED_SOLO_5x5 else "RANKED_FLEX_SR"

    @classmethod
    def from_queue_id(cls, queue_id: int) -> Optional['QueueType']:
        try:
            return cls(queue_id)
        except ValueError:
            return None

    @classmethod
    def ranked_queues(cls) -> list['QueueType']:
        """Get all ranked queue types."""
        return [cls.RANKED_SOLO_5x5, cls.RANKED_FLEX_SR]
