"""Request bodies for the HTTP API."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from stockbrief.domain.models import (
    PriceBar,
    TickerFailure,
    TickerResult,
    TickerSuccess,
    epoch_ms_to_date,
)


class StockDataRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tickers: list[str]
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")


class BarPayload(BaseModel):
    """One bar in the quote API's compact format; `t` is epoch ms or an ISO date."""

    model_config = ConfigDict(allow_inf_nan=False)

    o: float
    c: float
    h: float
    l: float  # noqa: E741
    v: float = 0
    t: int | date

    def to_domain(self) -> PriceBar:
        timestamp = epoch_ms_to_date(self.t) if isinstance(self.t, int) else self.t
        return PriceBar(
            open=self.o,
            close=self.c,
            high=self.h,
            low=self.l,
            volume=int(round(self.v)),
            timestamp=timestamp,
        )


class TickerResultPayload(BaseModel):
    ticker: str
    results: list[BarPayload] | None = None
    status: str | None = None
    error: str | None = None

    def to_domain(self) -> TickerResult:
        if self.error:
            return TickerFailure(symbol=self.ticker, reason=self.error)
        bars = tuple(bar.to_domain() for bar in self.results or [])
        return TickerSuccess(symbol=self.ticker, bars=bars, status=self.status or "OK")


class AIReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stock_data: list[TickerResultPayload] = Field(alias="stockData")
    prompt: str | None = None
