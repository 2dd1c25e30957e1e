"""Crawl bookkeeping entities."""
from dataclasses import dataclass
from typing import Optional

from ..enums import CrawlStatus


@dataclass(frozen=True)
class FrontierEntry:
    """A player waiting to be expanded, and how many hops it is from a seed."""

    player_id: str
    depth: int = 0


@dataclass
class CrawlResult:
    """Outcome of one crawl run, as reported to the CLI."""

    status: CrawlStatus
    emitted: int
    target: int
    players_expanded: int = 0
    matches_rejected: int = 0
    matches_unavailable: int = 0
    error: Optional[BaseException] = None

    @property
    def error_kind(self) -> Optional[str]:
        return type(self.error).__name__ if self.error is not None else None

    @property
    def exit_code(self) -> int:
        return self.status.exit_code

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'emitted': self.emitted,
            'target': self.target,
            'players_expanded': self.players_expanded,
            'matches_rejected': self.matches_rejected,
            'matches_unavailable': self.matches_unavailable,
            'error_kind': self.error_kind,
            'error': str(self.error) if self.error is not None else None,
        }
