"""Request models accepted by the rate resolver."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Mapping, Union

from ecb_fx.calculator import parse_currency_spec
from ecb_fx.utils.dates import DateLike, normalize_date


@dataclass(slots=True)
class RateQuery:
    """Detailed form of a rate request.

    ``date`` defaults to "now", which also routes a cache miss to the daily
    feed. ``exact_date`` disables the fallback to an earlier day,
    ``ignore_cache`` skips the cache read and ``dont_store_cache`` keeps
    freshly fetched days out of the cache.
    """

    currency: str
    date: DateLike | None = None
    exact_date: bool = False
    ignore_cache: bool = False
    dont_store_cache: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "RateQuery":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unsupported rate options: {', '.join(unknown)}")
        if "currency" not in options:
            raise ValueError("Rate options must include 'currency'")
        return cls(**dict(options))


RateSpec = Union[str, RateQuery, Mapping[str, Any]]


@dataclass(slots=True, frozen=True)
class RateRequest:
    """Canonical, validated record for one resolution call."""

    currency: str
    codes: tuple[str, ...]
    day: date
    today: date
    is_current_date: bool
    exact_date: bool = False
    ignore_cache: bool = False
    dont_store_cache: bool = False

    @classmethod
    def from_spec(cls, spec: RateSpec, *, now: datetime) -> "RateRequest":
        """Normalise a bare currency string, :class:`RateQuery` or mapping."""

        if isinstance(spec, str):
            query = RateQuery(currency=spec)
        elif isinstance(spec, RateQuery):
            query = spec
        elif isinstance(spec, Mapping):
            query = RateQuery.from_mapping(spec)
        else:
            raise TypeError(
                f"Rate request must be a currency string, RateQuery or mapping, not {type(spec).__name__}"
            )

        is_current_date = query.date is None
        day = normalize_date(now if is_current_date else query.date)  # type: ignore[arg-type]
        return cls(
            currency=query.currency,
            codes=parse_currency_spec(query.currency),
            day=day,
            today=normalize_date(now),
            is_current_date=is_current_date,
            exact_date=bool(query.exact_date),
            ignore_cache=bool(query.ignore_cache),
            dont_store_cache=bool(query.dont_store_cache),
        )

    @property
    def stores_results(self) -> bool:
        return not self.dont_store_cache


__all__ = ["RateQuery", "RateRequest", "RateSpec"]
