"""Infrastructure API module."""
from .exceptions import RecapError, UpstreamError, UpstreamParseError
from .opendota_client import OpenDotaClient
from .rate_limiter import MinIntervalRateLimiter
from .retry_policy import RetryPolicy

__all__ = [
    'OpenDotaClient',
    'MinIntervalRateLimiter',
    'RetryPolicy',
    'RecapError',
    'UpstreamError',
    'UpstreamParseError',
]
