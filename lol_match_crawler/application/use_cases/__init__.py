"""Application use cases."""
from .collect_samples import CollectSamplesUseCase

__all__ = [
    "CollectSamplesUseCase",
]
