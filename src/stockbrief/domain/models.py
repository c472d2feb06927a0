"""Core market and report domain models."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from stockbrief.errors import InvalidRequestError

SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{1,5}$")


def normalize_symbol(value: str) -> str:
    """Uppercase and validate a caller-supplied ticker symbol."""
    symbol = str(value).strip().upper()
    if not SYMBOL_PATTERN.match(symbol):
        raise InvalidRequestError(
            f"Invalid ticker '{value}': expected 1-5 letters or digits"
        )
    return symbol


def date_to_epoch_ms(value: date) -> int:
    midnight = datetime(value.year, value.month, value.day, tzinfo=UTC)
    return int(midnight.timestamp() * 1000)


def epoch_ms_to_date(value: int | float) -> date:
    return datetime.fromtimestamp(float(value) / 1000.0, tz=UTC).date()


@dataclass(frozen=True)
class TickerRequest:
    """One symbol to fetch over an inclusive date range."""

    symbol: str
    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        if self.start_date > self.end_date:
            raise InvalidRequestError(
                f"startDate {self.start_date.isoformat()} is after "
                f"endDate {self.end_date.isoformat()}"
            )


@dataclass(frozen=True)
class PriceBar:
    """Daily OHLCV summary."""

    open: float
    close: float
    high: float
    low: float
    volume: int
    timestamp: date

    def to_payload(self) -> dict[str, Any]:
        """Render in the quote API's compact key format."""
        return {
            "o": self.open,
            "c": self.close,
            "h": self.high,
            "l": self.low,
            "v": self.volume,
            "t": date_to_epoch_ms(self.timestamp),
        }


@dataclass(frozen=True)
class TickerSuccess:
    """Bars fetched for a symbol, chronological ascending."""

    symbol: str
    bars: tuple[PriceBar, ...]
    status: str = "OK"

    def to_payload(self) -> dict[str, Any]:
        return {
            "ticker": self.symbol,
            "results": [bar.to_payload() for bar in self.bars],
            "status": self.status,
        }


@dataclass(frozen=True)
class TickerFailure:
    """A fetch that produced no usable bars."""

    symbol: str
    reason: str

    def to_payload(self) -> dict[str, Any]:
        return {"ticker": self.symbol, "error": self.reason}


TickerResult = TickerSuccess | TickerFailure
