"""Domain layer - entities, enums, and interfaces of the match crawler."""
from .entities import MatchSample, ParticipantSetup, Rejected, FrontierEntry, CrawlResult
from .enums import Region, QueueType, Rank, Role, CrawlStatus, RejectionReason
from .interfaces import IMatchRepository, ISampleSink

__all__ = [
    # Entities
    'MatchSample',
    'ParticipantSetup',
    'Rejected',
    'FrontierEntry',
    'CrawlResult',
    # Enums
    'Region',
    'QueueType',
    'Rank',
    'Role',
    'CrawlStatus',
    'RejectionReason',
    # Interfaces
    'IMatchRepository',
    'ISampleSink',
]
