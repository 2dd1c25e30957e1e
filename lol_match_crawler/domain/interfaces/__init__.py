"""Domain interfaces."""
from .repository import IMatchRepository
from .sink import ISampleSink

__all__ = [
    'IMatchRepository',
    'ISampleSink',
]
