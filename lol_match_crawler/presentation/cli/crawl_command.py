from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

import httpx

from lol_match_crawler.config import settings
from lol_match_crawler.core.logging import get_logger
from lol_match_crawler.domain.entities import CrawlResult
from lol_match_crawler.domain.enums import CrawlStatus, Region
from lol_match_crawler.infrastructure import CsvSampleSink, RiotAPIClient
from lol_match_crawler.infrastructure.api import EndpointRateLimiter, RateLimiter, RetryPolicy
from lol_match_crawler.infrastructure.persistence import default_output_path
from lol_match_crawler.application.use_cases import CollectSamplesUseCase

EXIT_CONFIG_ERROR = 2

_BRIGHT_GREEN = "\033[1;92m"
_RED = "\033[91m"
_CYAN = "\033[96m"
_RESET = "\033[0m"


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def _queue_list(value: str) -> List[int]:
    try:
        queues = [int(q) for q in value.split(",") if q.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid queue list {value!r}") from exc
    if not queues:
        raise argparse.ArgumentTypeError("queue list is empty")
    return queues


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lol-match-crawler",
        description="Crawl League of Legends match history breadth-first and write "
                    "one CSV row (draft setup + winner) per sampled match.",
    )
    parser.add_argument("-n", "--target", type=_positive_int, default=settings.TARGET_MATCHES,
                        help="number of match samples to collect (default: %(default)s)")
    parser.add_argument("-s", "--seed", action="append", dest="seeds", default=None, metavar="PLAYER",
                        help="seed player as PUUID or Riot ID 'name#tag'; repeatable. "
                             "Without seeds the region's apex ladder is used")
    parser.add_argument("-d", "--max-depth", type=_non_negative_int, default=settings.MAX_DEPTH,
                        help="maximum traversal distance from a seed (default: unbounded)")
    parser.add_argument("-r", "--region", default=settings.REGION,
                        help="platform to crawl, e.g. na1, euw1, kr (default: %(default)s)")
    parser.add_argument("-q", "--queues", type=_queue_list, default=settings.ELIGIBLE_QUEUES,
                        help="comma separated eligible queue ids (default: 420,440)")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="CSV file to write (default: OUTPUT_DIR/lol_matches-<timestamp>.csv)")
    parser.add_argument("--matches-per-player", type=_positive_int, default=settings.MATCHES_PER_PLAYER,
                        help="recent matches listed per expanded player (default: %(default)s)")
    parser.add_argument("--concurrency", type=_positive_int, default=settings.MAX_CONCURRENT_REQUESTS,
                        help="match downloads overlapped per player (default: %(default)s)")
    parser.add_argument("--api-key", default=None,
                        help="Riot API key (default: RIOT_API_KEY or the key file)")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        help="log level for the JSON log file (default: %(default)s)")
    return parser


class CrawlCommand:
    """The single ``lol-match-crawler`` run command."""

    def __init__(
        self,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rate_limiter: Optional[RateLimiter] = None,
        endpoint_limiter: Optional[EndpointRateLimiter] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self._transport = transport
        self._rate_limiter = rate_limiter
        self._endpoint_limiter = endpoint_limiter
        self._retry_policy = retry_policy
        self._log = get_logger(__name__, service="crawl-cli")

    def _make_progress_cb(self, label: str):
        width = 30

        def _progress(current: int, total: int) -> None:
            filled = int(width * (current / total)) if total else 0
            bar = "█" * filled + "-" * (width - filled)
            print(f"\r{label} | {bar} | {current}/{total}", end="", flush=True)
        return _progress

    def _print_summary(self, result: CrawlResult, output: Path) -> None:
        color = _RED if result.exit_code else _BRIGHT_GREEN
        print("")
        print("=" * 57)
        print("CRAWL SUMMARY")
        print("=" * 57)
        print(f"Terminal state:    {color}{result.status.value.upper()}{_RESET}")
        print(f"Samples collected: {result.emitted}/{result.target}")
        print(f"Players expanded:  {result.players_expanded}")
        print(f"Matches rejected:  {result.matches_rejected}")
        print(f"Matches missing:   {result.matches_unavailable}")
        if result.error is not None:
            print(f"Error:             {_RED}{result.error_kind}: {result.error}{_RESET}")
        print(f"Output:            {_CYAN}{output}{_RESET}")
        print("=" * 57)

    async def run(self, args: argparse.Namespace, cancel_event: Optional[asyncio.Event] = None) -> int:
        """Run one crawl from parsed ``build_parser()`` arguments; returns the exit code."""
        try:
            settings.validate(require_api_key=not args.api_key)
            region = Region.from_string(args.region)
        except ValueError as exc:
            print(f"{_RED}Error: {exc}{_RESET}")
            return EXIT_CONFIG_ERROR

        seeds = args.seeds if args.seeds is not None else settings.SEED_PLAYERS
        output: Path = args.output or default_output_path(settings.OUTPUT_DIR)
        api_key = (args.api_key or settings.load_api_key()).strip()
        self._log.info(f"start region={region.value} target={args.target} seeds={len(seeds)}")

        sink = CsvSampleSink(output)
        try:
            sink.open()
        except OSError as exc:
            sink.close()
            self._log.error(f"cannot open output {output}: {exc}")
            result = CrawlResult(CrawlStatus.FAILED, emitted=0, target=args.target, error=exc)
            self._print_summary(result, output)
            return result.exit_code

        with sink:
            async with RiotAPIClient(
                api_key,
                rate_limiter=self._rate_limiter,
                endpoint_limiter=self._endpoint_limiter,
                retry_policy=self._retry_policy,
                transport=self._transport,
            ) as api:
                use_case = CollectSamplesUseCase(
                    api,
                    region,
                    target=args.target,
                    max_depth=args.max_depth,
                    eligible_queues=args.queues,
                    matches_per_player=args.matches_per_player,
                    max_concurrency=args.concurrency,
                    seed_discovery_count=settings.SEED_DISCOVERY_COUNT,
                )
                result = await use_case.execute(
                    seeds,
                    sink,
                    cancel_event=cancel_event,
                    progress_callback=self._make_progress_cb(region.value),
                )

        self._print_summary(result, output)
        if result.exit_code:
            self._log.error(f"done status={result.status.value} error={result.error_kind}")
        else:
            self._log.success(f"done status={result.status.value} samples={result.emitted}")
        return result.exit_code
