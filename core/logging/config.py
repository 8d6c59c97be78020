from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, QueueHandler, QueueListener
from queue import Queue
from pathlib import Path
from typing import Optional

from .levels import register_levels, to_level
from .formatter import ConsoleFormatter, JSONFormatter

_listener: QueueListener | None = None

# Chatty third-party loggers; httpx logs every request at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore")


def bootstrap_logging(
    *,
    service: str = "recap",
    level: str | int | None = None,
    log_dir: Optional[Path] = None,
    log_file_name: str = "recap.jsonl",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> None:
    """Install console and rotating JSON-lines handlers on the root logger.

    Console output goes to stderr so stdout stays free for the report.
    The file handler sits behind a queue listener so that request-heavy
    code never blocks on disk writes.
    """
    global _listener
    register_levels()
    root = logging.getLogger()
    root.handlers.clear()
    lvl = to_level(level or os.getenv("LOG_LEVEL", "INFO"))
    root.setLevel(lvl)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(lvl, logging.WARNING))

    enable_console = os.getenv("LOG_CONSOLE", "true").strip().lower() == "true"
    console_level_str = os.getenv("LOG_CONSOLE_LEVEL", "")
    if enable_console:
        console = logging.StreamHandler(sys.stderr)
        console_level = to_level(console_level_str) if console_level_str else lvl
        console.setLevel(console_level)
        console.setFormatter(ConsoleFormatter(service=service))
        root.addHandler(console)

    if log_dir:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            root.warning("log directory %s unavailable: %s", log_dir, exc)
            return
        json_handler = RotatingFileHandler(str(log_dir / log_file_name), maxBytes=max_bytes, backupCount=backup_count)
        json_handler.setLevel(lvl)
        json_handler.setFormatter(JSONFormatter(service=service))
        q: Queue[logging.LogRecord] = Queue(-1)
        root.addHandler(QueueHandler(q))
        _listener = QueueListener(q, json_handler, respect_handler_level=True)
        _listener.start()


def shutdown_logging() -> None:
    """Flush and stop the file listener, if one was started."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
