"""Application services root exports."""
from .crawler import CrawlController, Frontier, VisitedRegistry
from .extractor import MatchExtractor
from .seed import SeedDiscoveryService

__all__ = [
    "CrawlController",
    "Frontier",
    "VisitedRegistry",
    "MatchExtractor",
    "SeedDiscoveryService",
]
