"""Polygon aggregates quote provider."""

from __future__ import annotations

from datetime import date
from time import sleep

import numpy as np
import pandas as pd
import requests

from stockbrief.data.base import QuoteSeries
from stockbrief.domain.models import PriceBar
from stockbrief.errors import QuoteProviderError


class PolygonQuoteProvider:
    """Fetch daily OHLCV bars from Polygon's aggregates endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.polygon.io",
        timeout: float = 10.0,
        max_retries: int = 1,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": f"Bearer {api_key}"})

    def get_bars(self, symbol: str, start_date: date, end_date: date) -> QuoteSeries:
        normalized_symbol = symbol.strip().upper()
        payload = self._request_with_retry(
            symbol=normalized_symbol,
            path=(
                f"/v2/aggs/ticker/{normalized_symbol}/range/1/day/"
                f"{start_date.isoformat()}/{end_date.isoformat()}"
            ),
            params={"adjusted": "true", "sort": "asc"},
        )
        results = payload.get("results")
        if not isinstance(results, list) or not results:
            raise QuoteProviderError(f"No data available for {normalized_symbol}")
        frame = self._bars_to_frame(normalized_symbol, results)
        if frame.empty:
            raise QuoteProviderError(f"No data available for {normalized_symbol}")
        status = str(payload.get("status") or "OK")
        return QuoteSeries(bars=self._frame_to_bars(frame), status=status)

    def _request_with_retry(self, symbol: str, path: str, params: dict[str, str]) -> dict:
        url = f"{self.base_url}{path}"
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as exc:
                if attempt == self.max_retries:
                    raise QuoteProviderError(f"Quote request failed for {symbol}: {exc}") from exc
                sleep(float(attempt))
                continue
            if response.status_code == 429 or response.status_code >= 500:
                if attempt == self.max_retries:
                    raise QuoteProviderError(
                        f"Failed to fetch data for {symbol}: {response.status_code}"
                    )
                sleep(float(attempt))
                continue
            if response.status_code >= 400:
                raise QuoteProviderError(
                    f"Failed to fetch data for {symbol}: {response.status_code}"
                )
            try:
                payload = response.json()
            except ValueError as exc:
                raise QuoteProviderError(f"Invalid quote payload for {symbol}") from exc
            if not isinstance(payload, dict):
                raise QuoteProviderError(f"Invalid quote payload for {symbol}")
            return payload
        raise QuoteProviderError(f"Quote request exhausted retries for {symbol}")

    @staticmethod
    def _bars_to_frame(symbol: str, bars: list[dict]) -> pd.DataFrame:
        frame = pd.DataFrame(bars)
        required = {"o", "h", "l", "c", "t"}
        if not required.issubset(frame.columns):
            raise QuoteProviderError(f"{symbol}: bar payload missing OHLC fields")
        if "v" not in frame.columns:
            frame["v"] = 0
        frame = frame.rename(
            columns={
                "o": "open",
                "h": "high",
                "l": "low",
                "c": "close",
                "v": "volume",
                "t": "time",
            }
        )
        frame = frame[["open", "high", "low", "close", "volume", "time"]]
        frame = frame.apply(pd.to_numeric, errors="coerce")
        frame = frame.replace([np.inf, -np.inf], np.nan)
        frame["volume"] = frame["volume"].fillna(0)
        frame = frame.dropna(subset=["open", "high", "low", "close", "time"])
        frame.index = pd.to_datetime(frame["time"], unit="ms", utc=True)
        return frame.sort_index()

    @staticmethod
    def _frame_to_bars(frame: pd.DataFrame) -> list[PriceBar]:
        return [
            PriceBar(
                open=float(row.open),
                close=float(row.close),
                high=float(row.high),
                low=float(row.low),
                volume=int(round(row.volume)),
                timestamp=row.Index.date(),
            )
            for row in frame.itertuples()
        ]
