"""Turn a per-day rate table into single-currency or cross rates."""

from __future__ import annotations

from typing import Mapping

from ecb_fx.errors import InvalidCurrencySpecError, UnknownCurrencyError


def parse_currency_spec(spec: str) -> tuple[str, ...]:
    """Split ``"JPY"`` or ``"JPY/BGN"`` into its currency codes."""

    if not isinstance(spec, str):
        raise InvalidCurrencySpecError(f"Currency must be a string, got {type(spec).__name__}")
    parts = tuple(part.strip() for part in spec.split("/"))
    if len(parts) > 2:
        raise InvalidCurrencySpecError(
            f"Currency {spec!r} has more than two codes; expected CODE or BASE/QUOTE"
        )
    if any(not part for part in parts):
        raise InvalidCurrencySpecError(f"Currency {spec!r} contains an empty code")
    return parts


def _lookup(table: Mapping[str, float], code: str) -> float:
    rate = table.get(code)
    if rate is None or rate <= 0:
        raise UnknownCurrencyError(code)
    return rate


def compute_rate(table: Mapping[str, float], spec: str | tuple[str, ...]) -> float:
    """Return the rate for ``spec`` using EUR-based ``table`` values.

    A pair ``A/B`` yields ``rate(A) / rate(B)``. The first missing code is
    reported, ``A`` before ``B``; a code with a non-positive rate counts as
    missing.
    """

    codes = parse_currency_spec(spec) if isinstance(spec, str) else spec
    first = _lookup(table, codes[0])
    if len(codes) == 1:
        return first
    second = _lookup(table, codes[1])
    return first / second


__all__ = ["compute_rate", "parse_currency_spec"]
