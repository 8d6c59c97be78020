"""Main CLI entry-point."""
from __future__ import annotations

import asyncio
import sys

from core.logging import bootstrap_logging, shutdown_logging
from config import settings


def main(argv: list[str]) -> int:
    bootstrap_logging(
        service="recap",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="recap.jsonl",
    )
    # Imported after logging is configured so module loggers pick it up.
    from presentation.cli import ReportCommand

    try:
        return asyncio.run(ReportCommand().run(argv))
    except KeyboardInterrupt:
        return 130
    finally:
        shutdown_logging()


def run() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
