"""Infrastructure repositories module."""
from .match_repository import MatchRepository

__all__ = [
    'MatchRepository',
]
