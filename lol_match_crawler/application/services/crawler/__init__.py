"""Crawl engine: frontier, visited registry and the controller driving them."""
from .frontier import Frontier
from .registry import VisitedRegistry
from .controller import CrawlController, CrawlState, ProgressCallback

__all__ = [
    "Frontier",
    "VisitedRegistry",
    "CrawlController",
    "CrawlState",
    "ProgressCallback",
]
