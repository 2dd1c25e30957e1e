"""Domain enumerations."""
from .region import Region
from .queue_type import QueueType
from .rank import Rank
from .role import Role
from .crawl_status import CrawlStatus
from .rejection_reason import RejectionReason

__all__ = [
    'Region',
    'QueueType',
    'Rank',
    'Role',
    'CrawlStatus',
    'RejectionReason',
]
