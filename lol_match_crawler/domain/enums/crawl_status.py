"""Crawl lifecycle states."""
from enum import Enum


class CrawlStatus(Enum):
    """States of one crawl run.

    SEEDING -> RUNNING -> one of the terminal states. EXHAUSTED means the
    reachable graph ran out of eligible matches before the target was met;
    it is a normal outcome, unlike FAILED.
    """

    SEEDING = "seeding"
    RUNNING = "running"
    COMPLETED = "completed"
    EXHAUSTED = "exhausted"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self not in (CrawlStatus.SEEDING, CrawlStatus.RUNNING)

    @property
    def exit_code(self) -> int:
        """Process exit code reported by the CLI for this terminal state."""
        codes = {
            CrawlStatus.COMPLETED: 0,
            CrawlStatus.EXHAUSTED: 0,
            CrawlStatus.FAILED: 1,
            CrawlStatus.CANCELLED: 130,
        }
        if self not in codes:
            raise ValueError(f"{self.value} is not a terminal state")
        return codes[self]
