"""Quote provider contract."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from stockbrief.domain.models import PriceBar


@dataclass(frozen=True)
class QuoteSeries:
    """Bars for one symbol plus the quote API's own status flag (e.g. OK, DELAYED)."""

    bars: list[PriceBar]
    status: str = "OK"


class QuoteProvider(Protocol):
    """Interface for daily bar retrieval."""

    def get_bars(self, symbol: str, start_date: date, end_date: date) -> QuoteSeries:
        """Return daily bars in chronological order, or raise QuoteProviderError."""
