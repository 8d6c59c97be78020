"""Structured logging: levels, per-report fields, formatters, bootstrap."""
from .config import bootstrap_logging, shutdown_logging
from .context import current_fields, log_scope
from .levels import LogLevel
from .logger import StructuredLogger, get_logger, traceable

__all__ = [
    "bootstrap_logging",
    "shutdown_logging",
    "current_fields",
    "log_scope",
    "LogLevel",
    "StructuredLogger",
    "get_logger",
    "traceable",
]
