from __future__ import annotations

from datetime import date

import pytest

from stockbrief.domain.models import (
    PriceBar,
    TickerFailure,
    TickerRequest,
    TickerSuccess,
    date_to_epoch_ms,
    epoch_ms_to_date,
    normalize_symbol,
)
from stockbrief.errors import InvalidRequestError


def test_normalize_symbol_uppercases_and_strips() -> None:
    assert normalize_symbol(" aapl ") == "AAPL"
    assert normalize_symbol("BRK1") == "BRK1"


@pytest.mark.parametrize("value", ["", "TOOLONG", "BRK.B", "AA PL"])
def test_normalize_symbol_rejects_malformed(value: str) -> None:
    with pytest.raises(InvalidRequestError):
        normalize_symbol(value)


def test_ticker_request_requires_ordered_dates() -> None:
    request = TickerRequest("msft", date(2024, 1, 2), date(2024, 1, 2))
    assert request.symbol == "MSFT"

    with pytest.raises(InvalidRequestError, match="after"):
        TickerRequest("MSFT", date(2024, 1, 5), date(2024, 1, 2))


def test_epoch_ms_conversion_uses_utc_dates() -> None:
    assert date_to_epoch_ms(date(2024, 1, 2)) == 1704153600000
    assert epoch_ms_to_date(1704153600000) == date(2024, 1, 2)


def test_payloads_use_quote_api_shape() -> None:
    bar = PriceBar(
        open=10.0, close=11.0, high=12.0, low=9.5, volume=1200, timestamp=date(2024, 1, 2)
    )
    success = TickerSuccess(symbol="AAPL", bars=(bar,))
    failure = TickerFailure(symbol="ZZZZ", reason="No data available for ZZZZ")

    assert success.to_payload() == {
        "ticker": "AAPL",
        "results": [
            {"o": 10.0, "c": 11.0, "h": 12.0, "l": 9.5, "v": 1200, "t": 1704153600000}
        ],
        "status": "OK",
    }
    assert failure.to_payload() == {"ticker": "ZZZZ", "error": "No data available for ZZZZ"}
