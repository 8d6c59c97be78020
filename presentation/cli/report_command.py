from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, TextIO

import httpx

from config import settings
from core.logging import get_logger, StructuredLogger
from domain.entities import Report
from domain.enums import MAX_YEAR, MIN_YEAR, QueueKey, RangeKey, current_utc_year
from infrastructure import MatchRepository, MinIntervalRateLimiter, OpenDotaClient, ResultCache
from infrastructure.api import RecapError
from application.services import DeepEnrichmentWorker
from application.use_cases import BuildPlayerReportUseCase, ReportRequest


def _deep_limit(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if not 0 <= n <= settings.DEEP_MATCH_LIMIT_MAX:
        raise argparse.ArgumentTypeError(f"must be between 0 and {settings.DEEP_MATCH_LIMIT_MAX}")
    return n


def _year(value: str) -> int:
    try:
        year = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a year: {value!r}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise argparse.ArgumentTypeError(f"must be between {MIN_YEAR} and {MAX_YEAR}")
    return year


def _account_id(value: str) -> int:
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f"account id must be numeric: {value!r}")
    return int(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recap",
        description="Build a Dota 2 player recap from OpenDota match history.",
    )
    parser.add_argument("account_id", type=_account_id, help="32-bit OpenDota account id")
    window = parser.add_mutually_exclusive_group()
    window.add_argument(
        "--range",
        dest="range_key",
        choices=[r.value for r in RangeKey],
        default=RangeKey.LAST_YEAR.value,
    )
    window.add_argument(
        "--year",
        type=_year,
        nargs="?",
        const=current_utc_year(),
        help=f"calendar year in UTC ({MIN_YEAR}..{MAX_YEAR}); bare --year means the current year",
    )
    parser.add_argument(
        "--queue",
        dest="queue_key",
        choices=[q.value for q in QueueKey],
        default=QueueKey.ALL.value,
    )
    parser.add_argument(
        "--deep-limit",
        type=_deep_limit,
        default=settings.DEEP_MATCH_LIMIT,
        help=f"most recent matches to enrich with details (0..{settings.DEEP_MATCH_LIMIT_MAX})",
    )
    parser.add_argument(
        "--parse",
        action="store_true",
        help="ask OpenDota to parse enriched matches that have no details yet",
    )
    parser.add_argument("--format", choices=("json", "summary"), default="json")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 = compact)")
    return parser


class ReportCommand:
    """Builds one report and writes it to stdout."""

    def __init__(
        self,
        out: TextIO = sys.stdout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.out = out
        self.transport = transport
        self.logger: StructuredLogger = get_logger(__name__, service="report-cli")

    async def run(self, argv: Optional[List[str]] = None) -> int:
        args = build_parser().parse_args(argv)
        settings.validate()

        request = ReportRequest(
            account_id=args.account_id,
            range_key=RangeKey.from_string(args.range_key),
            queue_key=QueueKey.from_string(args.queue_key),
            deep_limit=args.deep_limit,
            request_parse_if_missing=args.parse,
            year=args.year,
        )

        # One limiter and one cache per process; everything below shares them.
        limiter = MinIntervalRateLimiter(settings.MIN_REQUEST_INTERVAL_MS / 1000.0)
        cache = ResultCache()
        async with OpenDotaClient(limiter, transport=self.transport) as api:
            repository = MatchRepository(api, cache)
            use_case = BuildPlayerReportUseCase(
                repository,
                enrichment=DeepEnrichmentWorker(repository, concurrency=settings.DEEP_CONCURRENCY),
            )
            try:
                report = await use_case.execute(request)
            except RecapError as exc:
                self.logger.error(
                    lambda: f"report failed: {exc}",
                    extra={"status_code": getattr(exc, "status_code", None)},
                )
                return 1

        if args.format == "summary":
            self._print_summary(report)
        else:
            json.dump(report.to_dict(), self.out, indent=args.indent or None)
            self.out.write("\n")
        return 0

    def _print_summary(self, report: Report) -> None:
        data = report.to_dict()
        totals = data["totals"]
        sides = data["sides"]
        streaks = data["streaks"]
        farm = data["deep"]["farm_profile"]
        lines = [
            "=" * 57,
            f"RECAP  {self._window_label(data['filters'])}  queue={data['filters']['queue']}",
            "=" * 57,
            f"Matches: {totals['matches']}  Wins: {totals['wins']}  Winrate: {totals['winrate']}%",
            f"Playtime: {totals['playtime_hours']}h  Avg GPM/XPM: {totals['avg_gpm']}/{totals['avg_xpm']}",
            f"Radiant: {sides['radiant']['winrate']}%  Dire: {sides['dire']['winrate']}%",
            f"Longest win streak: {streaks['longest_win']}  Longest loss streak: {streaks['longest_loss']}",
        ]
        best = data["highlights"]["most_kills_game"]
        if best:
            lines.append(
                f"Most kills: {best['kills']} on {best['hero_name']} ({best['date_utc'][:10]}, match {best['match_id']})"
            )
        for hero in data["heroes"]["top3"]:
            lines.append(f"  {hero['name']:<20} {hero['matches']:>4} games  {hero['winrate']:>6}%  KDA {hero['kda']}")
        if farm["matches_used"]:
            lines.append(
                f"Farm (GPM) early/mid/late: {farm['early_gpm']}/{farm['mid_gpm']}/{farm['late_gpm']}"
                f"  over {farm['matches_used']} matches"
            )
        for warning in data["warnings"]:
            lines.append(f"! {warning}")
        lines.append("=" * 57)
        self.out.write("\n".join(lines) + "\n")

    @staticmethod
    def _window_label(filters: dict) -> str:
        if filters["year"] is not None:
            return f"year={filters['year']}"
        return f"range={filters['range']}"
