"""Rule-based report used when no AI report is available."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import StrEnum

from stockbrief.domain.models import PriceBar, TickerFailure, TickerResult

BAND_THRESHOLD_PCT = 2.0

INTRO = "Hey there, trading superstar! 🚀 Here's what the numbers are whispering:\n\n"
CLOSING = (
    "Remember: Markets are wild beasts! This AI is having fun with your data, "
    "but always do your homework before making moves! 💰🎯"
)


class Band(StrEnum):
    """Period-change classification bands."""

    SURGE = "surge"
    STEADY_GAIN = "steady_gain"
    MINOR_DIP = "minor_dip"
    DECLINE = "decline"


def period_change_pct(bars: Sequence[PriceBar]) -> float | None:
    """Percent move from the first bar's open to the last bar's close.

    Returns None when there are no bars or when no finite change can be computed.
    """
    if not bars:
        return None
    first_open = bars[0].open
    if not math.isfinite(first_open) or first_open <= 0:
        return None
    change = (bars[-1].close - first_open) / first_open * 100.0
    return change if math.isfinite(change) else None


def classify_change(change_pct: float) -> Band:
    """Map a period change onto its band. +2 is a steady gain; 0 and -2 are minor dips."""
    if change_pct > BAND_THRESHOLD_PCT:
        return Band.SURGE
    if change_pct > 0:
        return Band.STEADY_GAIN
    if change_pct >= -BAND_THRESHOLD_PCT:
        return Band.MINOR_DIP
    return Band.DECLINE


def recommendation_line(symbol: str, change_pct: float) -> str:
    band = classify_change(change_pct)
    if band is Band.SURGE:
        return (
            f"🔥 {symbol} is absolutely crushing it with a {change_pct:.1f}% surge! "
            "This baby's got momentum - HOLD tight or BUY more if you're feeling brave!"
        )
    if band is Band.STEADY_GAIN:
        return (
            f"📈 {symbol} showing steady gains at {change_pct:.1f}%. Not bad, not bad! "
            "HOLD your position and watch it climb."
        )
    if band is Band.MINOR_DIP:
        return (
            f"📉 {symbol} dipped {abs(change_pct):.1f}% - could be your golden buying "
            "opportunity! HOLD or BUY the dip!"
        )
    return (
        f"⚠️ {symbol} took a hit with {abs(change_pct):.1f}% down. Time to think: "
        "HOLD for the comeback or SELL to protect your portfolio?"
    )


def failure_line(symbol: str, reason: str) -> str:
    return f"❌ Couldn't fetch data for {symbol} - {reason}"


def analyze(results: Sequence[TickerResult]) -> str:
    """Build the fallback report. Pure: identical input gives identical text."""
    lines: list[str] = []
    for result in results:
        if isinstance(result, TickerFailure):
            lines.append(failure_line(result.symbol, result.reason))
            continue
        if not result.bars:
            continue
        change = period_change_pct(result.bars)
        if change is None:
            lines.append(failure_line(result.symbol, "opening price unavailable"))
            continue
        lines.append(recommendation_line(result.symbol, change))

    body = "".join(f"{line}\n\n" for line in lines)
    return f"{INTRO}{body}{CLOSING}"
