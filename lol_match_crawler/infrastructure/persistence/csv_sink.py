"""Append-only CSV writer for match samples."""
from __future__ import annotations

import csv
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Optional

from lol_match_crawler.core.logging import get_logger
from lol_match_crawler.domain.entities import SCHEMA_VERSION, MatchSample, csv_header
from lol_match_crawler.domain.interfaces import ISampleSink

logger = get_logger(__name__, service="csv-sink")


def default_output_path(output_dir: Path, now: Optional[datetime] = None) -> Path:
    """``lol_matches-<UTC timestamp>.csv`` inside ``output_dir``."""
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return output_dir / f"lol_matches-{stamp}.csv"


class CsvSampleSink(ISampleSink):
    """
    Writes one CSV row per sample.

    The header goes out when the file is opened; every row is flushed and
    fsync'ed before ``write`` returns, so a crash leaves a valid prefix of
    complete rows.
    """

    def __init__(self, path: Path, *, fsync: bool = True) -> None:
        self.path = Path(path)
        self.rows_written = 0
        self._fsync = fsync
        self._file: Optional[IO[str]] = None
        self._writer = None

    def open(self) -> "CsvSampleSink":
        if self._file is not None:
            return self
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        self._writer.writerow(csv_header())
        self._sync()
        logger.info(f"writing samples (schema v{SCHEMA_VERSION}) to {self.path}")
        return self

    def write(self, sample: MatchSample) -> None:
        if self._writer is None:
            raise RuntimeError("CsvSampleSink is not open")
        self._writer.writerow(sample.to_row())
        self._sync()
        self.rows_written += 1

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None

    def _sync(self) -> None:
        self._file.flush()
        if self._fsync:
            os.fsync(self._file.fileno())

    def __enter__(self) -> "CsvSampleSink":
        return self.open()

    def __exit__(self, *_) -> None:
        self.close()
