"""Crawl controller - breadth-first traversal of the player/match graph."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from lol_match_crawler.core.logging import context as log_context, get_logger
from lol_match_crawler.domain.entities import CrawlResult, FrontierEntry, Rejected
from lol_match_crawler.domain.enums import CrawlStatus
from lol_match_crawler.domain.interfaces import IMatchRepository, ISampleSink
from lol_match_crawler.infrastructure.api.errors import AuthRejected, ProviderUnavailable
from ..extractor import MatchExtractor
from .frontier import Frontier
from .registry import VisitedRegistry

logger = get_logger(__name__, service="crawler")

ProgressCallback = Callable[[int, int], None]

# Errors that end the run; everything else the provider throws is handled below us
_FATAL_ERRORS = (AuthRejected, ProviderUnavailable, OSError)


@dataclass
class CrawlState:
    """Everything one run mutates. Owned by the controller's loop only."""

    target: int
    frontier: Frontier = field(default_factory=Frontier)
    registry: VisitedRegistry = field(default_factory=VisitedRegistry)
    status: CrawlStatus = CrawlStatus.SEEDING
    emitted: int = 0
    players_expanded: int = 0
    matches_rejected: int = 0
    matches_unavailable: int = 0
    error: Optional[BaseException] = None


class CrawlController:
    """
    Collects exactly ``target`` unique match samples.

    Design:
    - Seeds are marked visited and queued at depth 0.
    - Each iteration pops one player (FIFO), lists its recent matches,
      fetches the ones the registry has not seen, extracts and emits them,
      then queues the unseen participants of every accepted match at
      depth + 1 (unless that exceeds ``max_depth``).
    - Stops on target reached (COMPLETED), empty frontier (EXHAUSTED),
      AuthRejected / ProviderUnavailable / sink I/O error (FAILED) or an
      observed cancellation (CANCELLED).

    With ``max_concurrency > 1`` the match downloads of one player are
    overlapped in chunks no larger than the remaining target; extraction,
    emission and frontier pushes still happen in this loop, in provider order.
    """

    def __init__(
        self,
        repository: IMatchRepository,
        extractor: MatchExtractor,
        sink: ISampleSink,
        *,
        target: int,
        max_depth: Optional[int] = None,
        matches_per_player: int = 20,
        max_concurrency: int = 1,
        cancel_event: Optional[asyncio.Event] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        if target < 1:
            raise ValueError("target must be a positive integer")
        if max_depth is not None and max_depth < 0:
            raise ValueError("max_depth must not be negative")
        self.repository = repository
        self.extractor = extractor
        self.sink = sink
        self.target = target
        self.max_depth = max_depth
        self.matches_per_player = max(1, matches_per_player)
        self.max_concurrency = max(1, max_concurrency)
        self.cancel_event = cancel_event
        self.progress_cb = progress_callback
        self.state: Optional[CrawlState] = None

    # ------------------------------------------------------------------ #
    # Public entry point
    # ------------------------------------------------------------------ #

    async def run(self, seeds: Iterable[str]) -> CrawlResult:
        """Crawl from ``seeds`` until a terminal state is reached."""
        state = CrawlState(target=self.target)
        self.state = state

        for seed in seeds:
            if seed and state.registry.mark_player_if_new(seed):
                state.frontier.push(FrontierEntry(seed, 0))
        logger.info(f"crawl-start seeds={len(state.frontier)} target={self.target} max_depth={self.max_depth}")
        state.status = CrawlStatus.RUNNING

        try:
            while not state.status.is_terminal:
                await self._step(state)
        except _FATAL_ERRORS as exc:
            state.status = CrawlStatus.FAILED
            state.error = exc
            logger.error(f"crawl-failed {type(exc).__name__}: {exc}")

        result = CrawlResult(
            status=state.status,
            emitted=state.emitted,
            target=state.target,
            players_expanded=state.players_expanded,
            matches_rejected=state.matches_rejected,
            matches_unavailable=state.matches_unavailable,
            error=state.error,
        )
        logger.info(f"crawl-end {state.status.value}", extra={"context": result.to_dict()})
        return result

    # ------------------------------------------------------------------ #
    # One frontier expansion
    # ------------------------------------------------------------------ #

    async def _step(self, state: CrawlState) -> None:
        if self._cancelled():
            state.status = CrawlStatus.CANCELLED
            return

        entry = state.frontier.pop()
        if entry is None:
            logger.warning(f"frontier exhausted with {state.emitted}/{state.target} samples")
            state.status = CrawlStatus.EXHAUSTED
            return

        state.players_expanded += 1
        with log_context(player=entry.player_id, depth=entry.depth):
            match_ids = await self.repository.get_recent_match_ids(entry.player_id, self.matches_per_player)
            if not match_ids:
                logger.debug("no recent matches")
                return

            pending = iter(match_ids)
            while True:
                if self._cancelled():
                    state.status = CrawlStatus.CANCELLED
                    return
                chunk = self._next_chunk(state, pending)
                if not chunk:
                    return
                for match_id, raw in zip(chunk, await self._fetch(chunk)):
                    self._accept(state, entry, match_id, raw)
                    if state.emitted >= state.target:
                        state.status = CrawlStatus.COMPLETED
                        return

    def _next_chunk(self, state: CrawlState, pending: Iterator[str]) -> List[str]:
        """Mark and return up to the next ``max_concurrency`` unseen match ids."""
        size = min(self.max_concurrency, state.target - state.emitted)
        chunk: List[str] = []
        for match_id in pending:
            if state.registry.mark_match_if_new(match_id):
                chunk.append(match_id)
                if len(chunk) >= size:
                    break
        return chunk

    async def _fetch(self, match_ids: List[str]) -> List[Optional[Dict[str, Any]]]:
        if len(match_ids) == 1:
            return [await self.repository.get_match(match_ids[0])]
        results = await asyncio.gather(
            *(self.repository.get_match(mid) for mid in match_ids),
            return_exceptions=True,
        )
        for res in results:
            if isinstance(res, BaseException):
                raise res
        return list(results)

    def _accept(
        self,
        state: CrawlState,
        entry: FrontierEntry,
        match_id: str,
        raw: Optional[Dict[str, Any]],
    ) -> None:
        if raw is None:
            state.matches_unavailable += 1
            return

        outcome = self.extractor.extract(raw)
        if isinstance(outcome, Rejected):
            state.matches_rejected += 1
            logger.debug(f"rejected {match_id}: {outcome.reason.value} {outcome.detail}")
            return

        self.sink.write(outcome)
        state.emitted += 1
        logger.trace(lambda: f"sample {match_id} ({state.emitted}/{state.target})")
        if self.progress_cb:
            self.progress_cb(state.emitted, state.target)

        next_depth = entry.depth + 1
        if self.max_depth is not None and next_depth > self.max_depth:
            return
        for player_id in self.extractor.participant_ids(raw):
            if state.registry.mark_player_if_new(player_id):
                state.frontier.push(FrontierEntry(player_id, next_depth))

    def _cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()
