"""Infrastructure layer - API client, cache and repositories."""
from .api import OpenDotaClient, MinIntervalRateLimiter, RetryPolicy, UpstreamError
from .cache import ResultCache
from .repositories import MatchRepository

__all__ = [
    'OpenDotaClient',
    'MinIntervalRateLimiter',
    'RetryPolicy',
    'UpstreamError',
    'ResultCache',
    'MatchRepository',
]
