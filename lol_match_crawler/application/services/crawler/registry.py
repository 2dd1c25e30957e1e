"""Visited registry - per-run deduplication of players and matches."""
from __future__ import annotations

import threading
from typing import Set


class VisitedRegistry:
    """
    Two disjoint sets of already-scheduled ids.

    ``mark_*_if_new`` test and insert under one lock, so an id is handed out
    exactly once even if several workers race on it. Nothing is evicted: a
    run targets a bounded number of matches.
    """

    def __init__(self) -> None:
        self._players: Set[str] = set()
        self._matches: Set[str] = set()
        self._lock = threading.Lock()

    def mark_player_if_new(self, player_id: str) -> bool:
        with self._lock:
            if player_id in self._players:
                return False
            self._players.add(player_id)
            return True

    def mark_match_if_new(self, match_id: str) -> bool:
        with self._lock:
            if match_id in self._matches:
                return False
            self._matches.add(match_id)
            return True

    def has_player(self, player_id: str) -> bool:
        return player_id in self._players

    def has_match(self, match_id: str) -> bool:
        return match_id in self._matches

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def match_count(self) -> int:
        return len(self._matches)
