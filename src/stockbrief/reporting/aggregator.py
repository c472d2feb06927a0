"""Join per-ticker fetch outcomes back into caller order."""

from __future__ import annotations

from collections.abc import Mapping

from stockbrief.domain.models import TickerResult
from stockbrief.errors import AggregationError


def aggregate(outcomes: Mapping[int, TickerResult], expected: int) -> list[TickerResult]:
    """Return outcomes ordered by their input position.

    `outcomes` maps the index of each request in the caller's ticker list to
    its result, in whatever order the fetches completed. Successes and
    failures are passed through untouched.
    """
    missing = [index for index in range(expected) if index not in outcomes]
    if missing:
        raise AggregationError(f"Missing fetch outcomes for positions {missing}")
    extra = sorted(index for index in outcomes if not 0 <= index < expected)
    if extra:
        raise AggregationError(f"Unexpected fetch outcomes for positions {extra}")
    return [outcomes[index] for index in range(expected)]
