"""Central logging configuration and fixed-format service log lines."""

from __future__ import annotations

import logging

LOGGER_NAME = "stockbrief"


def setup_logger(log_level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure and return the service logger.

    Logs go to the console, plus an optional file if `log_file` is set.
    Safe to call repeatedly; handlers are only attached once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class ServiceLogger:
    """Logger with fixed line types for the report pipeline."""

    def __init__(self, name: str = LOGGER_NAME) -> None:
        self._logger = logging.getLogger(name)

    def fetch_ok(self, symbol: str, bar_count: int) -> None:
        self._logger.info("fetch ok | %s | bars %s", symbol, bar_count)

    def fetch_failed(self, symbol: str, reason: str) -> None:
        self._logger.warning("fetch failed | %s | %s", symbol, reason)

    def ai_skipped(self, reason: str) -> None:
        self._logger.info("ai skipped | %s", reason)

    def ai_fallback(self, reason: str) -> None:
        self._logger.warning("ai fallback | %s", reason)

    def report_ready(self, source: str, symbols: list[str]) -> None:
        self._logger.info(
            "report ready | source %s | tickers %s",
            source,
            ",".join(symbols) or "-",
        )

    def error(self, message: str) -> None:
        self._logger.exception("error | %s", message)
