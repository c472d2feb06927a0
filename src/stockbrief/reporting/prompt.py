"""Default instruction prompt for the generative-text service."""

from __future__ import annotations

import json
from collections.abc import Sequence

from stockbrief.domain.models import TickerResult

MAX_DATA_CHARS = 1000

PREAMBLE = (
    "You are a trading guru. Analyze the following stock data and provide a brief, "
    "enthusiastic 150-word report with buy/sell/hold recommendations. Use an energetic "
    'style like "baby, this stock is on fire!" or "hold tight, we\'re going to the moon!":'
)
CLOSING = "Provide specific recommendations for each stock with reasoning."


def build_prompt(results: Sequence[TickerResult]) -> str:
    """Render the results as compact JSON inside the trading-guru instruction."""
    data = json.dumps([result.to_payload() for result in results], separators=(",", ":"))
    return f"{PREAMBLE}\n\nStock Data:\n{data[:MAX_DATA_CHARS]}...\n\n{CLOSING}"
