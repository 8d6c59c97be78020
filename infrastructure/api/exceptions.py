"""Exceptions raised by the upstream client."""
from typing import Optional


class RecapError(Exception):
    """Base exception for recap errors."""
    pass


class UpstreamError(RecapError):
    """An upstream call failed.

    ``status_code`` is None when no response was received at all
    (timeout, connection refused, DNS failure).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        retry_after_ms: Optional[int] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retry_after_ms = retry_after_ms

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def is_transient(self) -> bool:
        """429, any 5xx, or no response: worth retrying."""
        if self.status_code is None or self.status_code == 429:
            return True
        return 500 <= self.status_code < 600


class UpstreamParseError(RecapError):
    """Raised when an upstream body cannot be decoded."""
    pass
