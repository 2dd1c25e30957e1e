"""Infrastructure API module."""
from .riot_client import RiotAPIClient
from .rate_limiter import EndpointRateLimiter, RateLimiter, parse_rate_limit_header
from .retry_policy import RetryPolicy
from .errors import (
    ProviderError,
    RateLimited,
    TransientProviderError,
    ProviderUnavailable,
    AuthRejected,
)

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'parse_rate_limit_header',
    'RetryPolicy',
    'ProviderError',
    'RateLimited',
    'TransientProviderError',
    'ProviderUnavailable',
    'AuthRejected',
]
