"""Logging helpers."""

from .logger import ServiceLogger, setup_logger

__all__ = ["ServiceLogger", "setup_logger"]
