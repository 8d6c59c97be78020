from __future__ import annotations

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    """Levels the stdlib lacks: per-attempt HTTP chatter and finished reports."""

    TRACE = 5
    SUCCESS = 25


def register_levels() -> None:
    for level in LogLevel:
        logging.addLevelName(level.value, level.name)


def to_level(value: int | str, default: int = logging.INFO) -> int:
    """Resolve ``LOG_LEVEL``-style input: a number, a stdlib name or TRACE/SUCCESS."""
    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    if name in LogLevel.__members__:
        return LogLevel[name].value
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default
