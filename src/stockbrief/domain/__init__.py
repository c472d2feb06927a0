"""Domain models."""

from .models import (
    PriceBar,
    TickerFailure,
    TickerRequest,
    TickerResult,
    TickerSuccess,
    normalize_symbol,
)

__all__ = [
    "PriceBar",
    "TickerFailure",
    "TickerRequest",
    "TickerResult",
    "TickerSuccess",
    "normalize_symbol",
]
