"""Output sink interface."""
from abc import ABC, abstractmethod

from ..entities import MatchSample


class ISampleSink(ABC):
    """Append-only destination for match samples, in arrival order."""

    @abstractmethod
    def write(self, sample: MatchSample) -> None:
        """Append one sample; it must be durable before this returns."""
        pass

    @abstractmethod
    def close(self) -> None:
        pass
