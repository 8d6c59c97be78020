"""Report time range enumeration."""
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple

SECONDS_PER_DAY = 24 * 3600

# Calendar years a report may cover.
MIN_YEAR = 2012
MAX_YEAR = 2100


class RangeKey(Enum):
    """Relative time range a report covers."""

    LAST_MONTH = "last_month"
    LAST_6_MONTHS = "last_6_months"
    LAST_YEAR = "last_year"

    @property
    def days(self) -> int:
        """Get range length in days."""
        days = {
            "last_month": 30,
            "last_6_months": 180,
        }
        return days.get(self.value, 365)

    def unix_bounds(self, now: Optional[float] = None) -> Tuple[int, int]:
        """Get inclusive (start, end) unix-second bounds ending at ``now``."""
        end = int(now if now is not None else time.time())
        return end - self.days * SECONDS_PER_DAY, end

    @classmethod
    def from_string(cls, value: str) -> 'RangeKey':
        """Create RangeKey from string (case-insensitive)."""
        return cls(value.strip().lower())


def current_utc_year(now: Optional[float] = None) -> int:
    """Calendar year of ``now`` (default: the current time) in UTC."""
    return datetime.fromtimestamp(now if now is not None else time.time(), tz=timezone.utc).year


def calendar_year_bounds(year: int) -> Tuple[int, int]:
    """
    Half-open UTC window of a calendar year.

    Returns (Jan 1 ``year`` 00:00:00, Jan 1 ``year``+1 00:00:00) in unix
    seconds; the end is excluded.
    """
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValueError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    return int(start.timestamp()), int(end.timestamp())
