from __future__ import annotations

import pytest

from ecb_fx.calculator import compute_rate, parse_currency_spec
from ecb_fx.errors import InvalidCurrencySpecError, UnknownCurrencyError

TABLE = {"USD": 1.0812, "JPY": 169.55, "BGN": 1.9558}


def test_single_currency_rate() -> None:
    assert compute_rate(TABLE, "JPY") == 169.55


def test_cross_rate_divides_base_by_quote() -> None:
    assert compute_rate(TABLE, "JPY/BGN") == 169.55 / 1.9558


def test_unknown_single_currency_is_named() -> None:
    with pytest.raises(UnknownCurrencyError) as excinfo:
        compute_rate(TABLE, "XXX")

    assert excinfo.value.currency == "XXX"
    assert "XXX" in str(excinfo.value)


@pytest.mark.parametrize(
    "spec, missing",
    [
        ("XXX/BGN", "XXX"),
        ("JPY/YYY", "YYY"),
        ("XXX/YYY", "XXX"),
    ],
)
def test_first_missing_code_is_reported(spec: str, missing: str) -> None:
    with pytest.raises(UnknownCurrencyError) as excinfo:
        compute_rate(TABLE, spec)

    assert excinfo.value.currency == missing


def test_base_currency_is_not_implicit() -> None:
    with pytest.raises(UnknownCurrencyError):
        compute_rate(TABLE, "EUR/USD")


def test_parse_currency_spec_strips_whitespace() -> None:
    assert parse_currency_spec(" JPY / BGN ") == ("JPY", "BGN")


@pytest.mark.parametrize("spec", ["JPY/BGN/USD", "JPY/", "/BGN", ""])
def test_parse_currency_spec_rejects_malformed_input(spec: str) -> None:
    with pytest.raises(InvalidCurrencySpecError):
        parse_currency_spec(spec)


@pytest.mark.parametrize("rate", [0.0, -1.5])
def test_non_positive_rate_is_treated_as_unknown(rate: float) -> None:
    table = {**TABLE, "XAU": rate}

    with pytest.raises(UnknownCurrencyError) as excinfo:
        compute_rate(table, "JPY/XAU")

    assert excinfo.value.currency == "XAU"
