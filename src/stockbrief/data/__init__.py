"""Market data provider implementations."""

from .base import QuoteProvider, QuoteSeries
from .fetcher import MarketDataFetcher
from .polygon_data import PolygonQuoteProvider

__all__ = [
    "MarketDataFetcher",
    "PolygonQuoteProvider",
    "QuoteProvider",
    "QuoteSeries",
]
