"""Custom exceptions for clearer error handling across the service."""


class StockBriefError(Exception):
    """Base exception for all app-specific errors."""


class ConfigError(StockBriefError):
    """Raised when environment configuration is invalid or missing."""


class InvalidRequestError(StockBriefError):
    """Raised when an inbound request is malformed."""


class QuoteProviderError(StockBriefError):
    """Raised when market data retrieval fails for a single ticker."""


class AIReportError(StockBriefError):
    """Raised when the generative-text service gives no usable report."""


class AggregationError(StockBriefError):
    """Raised when fetch outcomes cannot be joined back into input order."""
