"""Provider error taxonomy.

``RateLimited`` and ``TransientProviderError`` are resolved inside the API
client by waiting and retrying; callers only ever see ``AuthRejected`` and
``ProviderUnavailable``.
"""
from __future__ import annotations

from typing import Optional


class ProviderError(Exception):
    """Base class for failures talking to the Riot API."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class RateLimited(ProviderError):
    """HTTP 429: the provider asked us to come back after ``retry_after_s``."""

    def __init__(self, message: str, *, retry_after_s: float, url: Optional[str] = None) -> None:
        super().__init__(message, status_code=429, url=url)
        self.retry_after_s = retry_after_s


class TransientProviderError(ProviderError):
    """5xx, timeout or connection failure; worth retrying with backoff."""


class ProviderUnavailable(ProviderError):
    """Retries were exhausted; the provider cannot serve this request right now."""


class AuthRejected(ProviderError):
    """The API key is missing, invalid or expired. Never retried."""
