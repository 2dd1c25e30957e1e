"""Application layer - Services and use cases."""
from .services import CrawlController, MatchExtractor, SeedDiscoveryService
from .use_cases import CollectSamplesUseCase

__all__ = [
    'CrawlController',
    'MatchExtractor',
    'SeedDiscoveryService',
    'CollectSamplesUseCase',
]
