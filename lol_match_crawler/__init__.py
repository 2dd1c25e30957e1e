"""
League of Legends Match Crawler
===============================

Samples ranked LoL matches by breadth-first traversal of the player/match
graph and writes one CSV row per match: the draft setup of both teams and
which side won.

Layers: Domain -> Infrastructure -> Application -> Presentation.
"""

__version__ = "1.0.0"

from .domain import (
    MatchSample, ParticipantSetup, CrawlResult,
    Region, QueueType, CrawlStatus, RejectionReason,
)

from .config import settings

__all__ = [
    '__version__',
    'MatchSample',
    'ParticipantSetup',
    'CrawlResult',
    'Region',
    'QueueType',
    'CrawlStatus',
    'RejectionReason',
    'settings',
]
