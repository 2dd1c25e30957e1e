"""Frontier - FIFO queue of players awaiting expansion."""
from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from lol_match_crawler.domain.entities import FrontierEntry


class Frontier:
    """Breadth-first work queue: players come out in the order they were found."""

    def __init__(self) -> None:
        self._queue: Deque[FrontierEntry] = deque()

    def push(self, entry: FrontierEntry) -> None:
        self._queue.append(entry)

    def pop(self) -> Optional[FrontierEntry]:
        return self._queue.popleft() if self._queue else None

    def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)
