"""Presentation CLI exports."""
from .crawl_command import CrawlCommand, build_parser, EXIT_CONFIG_ERROR

__all__ = [
    "CrawlCommand",
    "build_parser",
    "EXIT_CONFIG_ERROR",
]
