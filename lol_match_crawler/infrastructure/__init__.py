"""Infrastructure layer - API client, repositories and output sinks."""
from .api import RiotAPIClient, RateLimiter, RetryPolicy
from .repositories import MatchRepository
from .persistence import CsvSampleSink

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'RetryPolicy',
    'MatchRepository',
    'CsvSampleSink',
]
