"""Main CLI entry-point."""
from __future__ import annotations

import asyncio
import signal
import sys
from typing import List, Optional

from lol_match_crawler.core.logging import bootstrap_logging, get_logger, shutdown_logging
from lol_match_crawler.config import settings
from lol_match_crawler.domain.enums import CrawlStatus
from lol_match_crawler.presentation.cli import CrawlCommand, build_parser

logger = get_logger(__name__, service="main")


def _install_cancel_handler(cancel_event: asyncio.Event):
    """First Ctrl+C asks the crawl to stop cleanly; a second one interrupts."""
    loop = asyncio.get_running_loop()
    previous = signal.getsignal(signal.SIGINT)

    def _on_sigint(signum, frame) -> None:
        print("\nCancelling after the current request... (Ctrl+C again to abort)", flush=True)
        signal.signal(signal.SIGINT, previous)
        loop.call_soon_threadsafe(cancel_event.set)

    signal.signal(signal.SIGINT, _on_sigint)
    return previous


async def _crawl(args, command: CrawlCommand) -> int:
    cancel_event = asyncio.Event()
    previous = _install_cancel_handler(cancel_event)
    try:
        return await command.run(args, cancel_event=cancel_event)
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: List[str], command: Optional[CrawlCommand] = None) -> int:
    args = build_parser().parse_args(argv)
    bootstrap_logging(level=args.log_level, log_dir=settings.LOG_DIR)
    try:
        return asyncio.run(_crawl(args, command or CrawlCommand()))
    except KeyboardInterrupt:
        logger.warning("interrupted")
        return CrawlStatus.CANCELLED.exit_code
    finally:
        shutdown_logging()


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
