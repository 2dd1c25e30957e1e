"""Domain entities."""
from .match_sample import (
    MatchSample,
    ParticipantSetup,
    Rejected,
    csv_header,
    SCHEMA_VERSION,
    BLUE_TEAM_ID,
    RED_TEAM_ID,
)
from .crawl import FrontierEntry, CrawlResult

__all__ = [
    'MatchSample',
    'ParticipantSetup',
    'Rejected',
    'csv_header',
    'SCHEMA_VERSION',
    'BLUE_TEAM_ID',
    'RED_TEAM_ID',
    'FrontierEntry',
    'CrawlResult',
]
