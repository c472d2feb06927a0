"""Stock brief report service."""

__version__ = "0.1.0"
