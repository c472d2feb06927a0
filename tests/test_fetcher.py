from __future__ import annotations

import random
import threading
import time
from datetime import date

import pytest

from stockbrief.data.base import QuoteSeries
from stockbrief.data.fetcher import MarketDataFetcher
from stockbrief.domain.models import PriceBar, TickerFailure, TickerRequest, TickerSuccess
from stockbrief.errors import QuoteProviderError

START = date(2024, 1, 2)
END = date(2024, 1, 5)


def _bars(open_price: float, close_price: float) -> list[PriceBar]:
    return [
        PriceBar(
            open=open_price,
            close=close_price,
            high=max(open_price, close_price),
            low=min(open_price, close_price),
            volume=1000,
            timestamp=START,
        )
    ]


class DelayedProvider:
    """Returns one bar per symbol after a per-symbol delay."""

    def __init__(self, delays: dict[str, float]) -> None:
        self.delays = delays
        self.completed: list[str] = []
        self._lock = threading.Lock()

    def get_bars(self, symbol: str, start_date: date, end_date: date) -> QuoteSeries:
        time.sleep(self.delays[symbol])
        with self._lock:
            self.completed.append(symbol)
        return QuoteSeries(_bars(100.0, 101.0))


class MixedProvider:
    def get_bars(self, symbol: str, start_date: date, end_date: date) -> QuoteSeries:
        if symbol == "BOOM":
            raise RuntimeError("socket closed")
        if symbol == "ZZZZ":
            raise QuoteProviderError("No data available for ZZZZ")
        if symbol == "NONE":
            return QuoteSeries([])
        if symbol == "LAG":
            return QuoteSeries(_bars(100.0, 103.0), status="DELAYED")
        return QuoteSeries(_bars(100.0, 103.0))


class RendezvousProvider:
    """Only returns once every expected request is in flight at the same time."""

    def __init__(self, parties: int) -> None:
        self.barrier = threading.Barrier(parties, timeout=2.0)

    def get_bars(self, symbol: str, start_date: date, end_date: date) -> QuoteSeries:
        self.barrier.wait()
        return QuoteSeries(_bars(100.0, 101.0))


def _requests(symbols: list[str]) -> list[TickerRequest]:
    return [TickerRequest(symbol, START, END) for symbol in symbols]


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5, 6])
def test_fetch_all_preserves_input_order_under_random_delays(seed: int) -> None:
    rng = random.Random(seed)
    symbols = ["AAPL", "TSLA", "MSFT", "NVDA", "AMZN"][: rng.randint(1, 5)]
    delays = {symbol: rng.uniform(0.0, 0.03) for symbol in symbols}
    provider = DelayedProvider(delays)
    fetcher = MarketDataFetcher(provider)

    results = fetcher.fetch_all(_requests(symbols))

    assert [result.symbol for result in results] == symbols
    assert sorted(provider.completed) == sorted(symbols)


def test_fetch_all_returns_in_input_order_when_first_ticker_is_slowest() -> None:
    provider = DelayedProvider({"AAPL": 0.05, "TSLA": 0.0, "MSFT": 0.0})
    fetcher = MarketDataFetcher(provider)

    results = fetcher.fetch_all(_requests(["AAPL", "TSLA", "MSFT"]))

    assert provider.completed[-1] == "AAPL"
    assert [result.symbol for result in results] == ["AAPL", "TSLA", "MSFT"]


def test_failures_are_isolated_per_ticker() -> None:
    fetcher = MarketDataFetcher(MixedProvider())

    results = fetcher.fetch_all(_requests(["AAPL", "BOOM", "ZZZZ", "NONE", "MSFT"]))

    assert [type(result) for result in results] == [
        TickerSuccess,
        TickerFailure,
        TickerFailure,
        TickerFailure,
        TickerSuccess,
    ]
    assert results[0].bars == tuple(_bars(100.0, 103.0))
    assert results[4].bars == tuple(_bars(100.0, 103.0))
    assert results[1].reason == "socket closed"
    assert results[2].reason == "No data available for ZZZZ"
    assert results[3].reason == "No data available for NONE"


def test_fetch_one_never_raises() -> None:
    fetcher = MarketDataFetcher(MixedProvider())

    result = fetcher.fetch_one(TickerRequest("BOOM", START, END))

    assert result == TickerFailure(symbol="BOOM", reason="socket closed")


def test_fetch_all_with_no_requests() -> None:
    assert MarketDataFetcher(MixedProvider()).fetch_all([]) == []


def test_fetch_all_runs_every_ticker_at_once() -> None:
    symbols = ["AAPL", "TSLA", "MSFT", "NVDA", "AMZN", "META"]
    fetcher = MarketDataFetcher(RendezvousProvider(len(symbols)))

    results = fetcher.fetch_all(_requests(symbols))

    assert all(isinstance(result, TickerSuccess) for result in results)
    assert [result.symbol for result in results] == symbols


def test_quote_status_is_carried_into_the_payload() -> None:
    fetcher = MarketDataFetcher(MixedProvider())

    results = fetcher.fetch_all(_requests(["LAG", "AAPL"]))

    assert results[0].status == "DELAYED"
    assert results[0].to_payload()["status"] == "DELAYED"
    assert results[1].to_payload()["status"] == "OK"
