"""Lane enumeration."""
from enum import Enum
from typing import Any


class Lane(Enum):
    """Lane a player was assigned to, as reported by the upstream lane code."""

    SAFE = "safe"
    MID = "mid"
    OFF = "off"
    JUNGLE = "jungle"
    ROAM = "roam"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: Any) -> 'Lane':
        """Map an upstream lane code (1..5) to a Lane; anything else is UNKNOWN."""
        codes = {
            1: cls.SAFE,
            2: cls.MID,
            3: cls.OFF,
            4: cls.JUNGLE,
            5: cls.ROAM,
        }
        if isinstance(code, bool):
            return cls.UNKNOWN
        return codes.get(code, cls.UNKNOWN)

    @classmethod
    def report_order(cls) -> list['Lane']:
        """Get lanes in the order they are listed in reports."""
        return list(cls)
