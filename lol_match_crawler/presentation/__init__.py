"""Presentation layer - User interfaces."""
from .cli import CrawlCommand, build_parser

__all__ = [
    "CrawlCommand",
    "build_parser",
]
