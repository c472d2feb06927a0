"""Concurrent per-ticker fetch with isolated failures."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed

from stockbrief.data.base import QuoteProvider
from stockbrief.domain.models import TickerFailure, TickerRequest, TickerResult, TickerSuccess
from stockbrief.logging.logger import ServiceLogger
from stockbrief.reporting.aggregator import aggregate


class MarketDataFetcher:
    """Fan out one quote request per ticker and join the outcomes in input order."""

    def __init__(
        self,
        provider: QuoteProvider,
        logger: ServiceLogger | None = None,
    ) -> None:
        self.provider = provider
        self.logger = logger or ServiceLogger()

    def fetch_one(self, request: TickerRequest) -> TickerResult:
        """Fetch a single ticker. Never raises; errors become TickerFailure."""
        symbol = request.symbol
        try:
            series = self.provider.get_bars(symbol, request.start_date, request.end_date)
        except Exception as exc:
            reason = str(exc) or exc.__class__.__name__
            self.logger.fetch_failed(symbol, reason)
            return TickerFailure(symbol=symbol, reason=reason)
        if not series.bars:
            reason = f"No data available for {symbol}"
            self.logger.fetch_failed(symbol, reason)
            return TickerFailure(symbol=symbol, reason=reason)
        self.logger.fetch_ok(symbol, len(series.bars))
        return TickerSuccess(symbol=symbol, bars=tuple(series.bars), status=series.status)

    def fetch_all(self, requests: Sequence[TickerRequest]) -> list[TickerResult]:
        """Fetch every ticker concurrently and wait for all of them to settle.

        The pool holds one worker per ticker so no request waits on another.
        """
        if not requests:
            return []
        outcomes: dict[int, TickerResult] = {}
        with ThreadPoolExecutor(max_workers=len(requests), thread_name_prefix="quote") as executor:
            futures = {
                executor.submit(self.fetch_one, request): index
                for index, request in enumerate(requests)
            }
            for future in as_completed(futures):
                outcomes[futures[future]] = future.result()
        return aggregate(outcomes, len(requests))
