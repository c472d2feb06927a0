"""Report generation: aggregation, AI reports and the rule-based fallback."""

from .aggregator import aggregate
from .ai_reporter import AIReporter
from .fallback import Band, analyze, classify_change, period_change_pct
from .prompt import build_prompt

__all__ = [
    "AIReporter",
    "Band",
    "aggregate",
    "analyze",
    "build_prompt",
    "classify_change",
    "period_change_pct",
]
