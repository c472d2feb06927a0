"""Command-line interface: serve the API or print a one-off report."""

from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta

import uvicorn

from stockbrief.api.app import create_app
from stockbrief.config import Settings, parse_symbols
from stockbrief.errors import StockBriefError
from stockbrief.logging.logger import setup_logger
from stockbrief.service import build_service

DEFAULT_LOOKBACK_DAYS = 3


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description="Stock brief API server and report runner")
    parser.add_argument("--host", type=str, help="Bind address for the API server")
    parser.add_argument("--port", type=int, help="Port for the API server")
    parser.add_argument("--log-level", type=str, help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument(
        "--tickers",
        type=str,
        help="Comma-separated symbols; print one report and exit instead of serving",
    )
    parser.add_argument(
        "--start-date",
        type=date.fromisoformat,
        help="First day of the range (YYYY-MM-DD), defaults to three days before the end date",
    )
    parser.add_argument(
        "--end-date",
        type=date.fromisoformat,
        help="Last day of the range (YYYY-MM-DD), defaults to today",
    )
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Apply CLI values onto environment-derived settings."""
    overrides: dict[str, object] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level.strip().upper()
    if (args.start_date or args.end_date) and not args.tickers:
        raise ValueError("--start-date/--end-date require --tickers")
    return settings.with_overrides(**overrides)


def resolve_date_range(
    start_date: date | None,
    end_date: date | None,
    today: date | None = None,
) -> tuple[date, date]:
    """Fill in missing bounds with a short window ending today."""
    end = end_date or today or date.today()
    start = start_date or end - timedelta(days=DEFAULT_LOOKBACK_DAYS)
    return start, end


def run_report(settings: Settings, args: argparse.Namespace) -> int:
    symbols = parse_symbols(args.tickers)
    if not symbols:
        print("No tickers given")
        return 2
    start, end = resolve_date_range(args.start_date, args.end_date)
    service = build_service(settings)
    try:
        report = service.build_report(symbols, start, end)
    except StockBriefError as exc:
        print(f"Request error: {exc}")
        return 2
    print(report)
    return 0


def serve(settings: Settings) -> int:
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def main() -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()
    try:
        settings = apply_cli_overrides(Settings.from_env(), args)
    except (StockBriefError, ValueError) as exc:
        print(f"Configuration error: {exc}")
        return 2
    setup_logger(settings.log_level, settings.log_file)
    if args.tickers:
        return run_report(settings, args)
    return serve(settings)


if __name__ == "__main__":
    sys.exit(main())
