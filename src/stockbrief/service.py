"""Report pipeline wiring: fetch, aggregate, then AI report or fallback."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from stockbrief.config import Settings
from stockbrief.data.fetcher import MarketDataFetcher
from stockbrief.data.polygon_data import PolygonQuoteProvider
from stockbrief.domain.models import TickerRequest, TickerResult
from stockbrief.logging.logger import ServiceLogger
from stockbrief.reporting.ai_reporter import AIReporter
from stockbrief.reporting.fallback import analyze


class ReportService:
    """Sequences the pipeline; its only branch is "AI report, else fallback"."""

    def __init__(
        self,
        fetcher: MarketDataFetcher,
        ai_reporter: AIReporter,
        logger: ServiceLogger | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.ai_reporter = ai_reporter
        self.logger = logger or ServiceLogger()

    def fetch_stock_data(
        self,
        symbols: Sequence[str],
        start_date: date,
        end_date: date,
    ) -> list[TickerResult]:
        """Validate every ticker up front, then fetch them all concurrently."""
        ticker_requests = [TickerRequest(symbol, start_date, end_date) for symbol in symbols]
        return self.fetcher.fetch_all(ticker_requests)

    def generate_report(self, results: Sequence[TickerResult], prompt: str | None = None) -> str:
        symbols = [result.symbol for result in results]
        report = self.ai_reporter.generate(results, prompt)
        if report is not None:
            self.logger.report_ready("ai", symbols)
            return report
        self.logger.report_ready("fallback", symbols)
        return analyze(results)

    def build_report(
        self,
        symbols: Sequence[str],
        start_date: date,
        end_date: date,
        prompt: str | None = None,
    ) -> str:
        results = self.fetch_stock_data(symbols, start_date, end_date)
        return self.generate_report(results, prompt)


def build_quote_provider(settings: Settings) -> PolygonQuoteProvider:
    return PolygonQuoteProvider(
        api_key=settings.polygon_api_key,
        base_url=settings.polygon_base_url,
        timeout=settings.quote_timeout_seconds,
        max_retries=settings.quote_max_retries,
    )


def build_service(settings: Settings) -> ReportService:
    """Wire the production pipeline from settings."""
    logger = ServiceLogger()
    fetcher = MarketDataFetcher(
        provider=build_quote_provider(settings),
        logger=logger,
    )
    ai_reporter = AIReporter.from_settings(settings, logger=logger)
    return ReportService(fetcher=fetcher, ai_reporter=ai_reporter, logger=logger)
