"""Public interface for the ecb_fx package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import Optional

from ecb_fx.cache.rate_cache import RateCache
from ecb_fx.calculator import compute_rate, parse_currency_spec
from ecb_fx.errors import (
    FxRateError,
    InvalidCurrencySpecError,
    InvalidDateError,
    NoDataError,
    ParseError,
    TransportError,
    UnknownCurrencyError,
)
from ecb_fx.ingestion.ecb import EcbFeedClient, parse_ecb_feed
from ecb_fx.ingestion.models import FeedWindow
from ecb_fx.query import RateQuery, RateRequest, RateSpec
from ecb_fx.resolver import FetchCoordinator, FxRateResolver
from ecb_fx.settings import ResolverSettings

__all__ = [
    "__version__",
    "EcbFeedClient",
    "FeedWindow",
    "FetchCoordinator",
    "FxRateError",
    "FxRateResolver",
    "InvalidCurrencySpecError",
    "InvalidDateError",
    "NoDataError",
    "ParseError",
    "RateCache",
    "RateQuery",
    "RateRequest",
    "ResolverSettings",
    "TransportError",
    "UnknownCurrencyError",
    "compute_rate",
    "default_resolver",
    "get_fx_rate",
    "get_fx_rate_async",
    "parse_currency_spec",
    "parse_ecb_feed",
]

try:
    __version__ = importlib_metadata.version("ecb-fx-rates")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

_DEFAULT_RESOLVER: Optional[FxRateResolver] = None


def default_resolver() -> FxRateResolver:
    """Return the lazily created resolver shared by the module-level helpers."""

    global _DEFAULT_RESOLVER
    if _DEFAULT_RESOLVER is None:
        _DEFAULT_RESOLVER = FxRateResolver()
    return _DEFAULT_RESOLVER


async def get_fx_rate_async(spec: RateSpec) -> float:
    """Resolve ``spec`` with the default resolver."""

    return await default_resolver().rate(spec)


def get_fx_rate(spec: RateSpec) -> float:
    """Blocking variant of :func:`get_fx_rate_async`.

    >>> get_fx_rate("JPY/BGN")  # doctest: +SKIP
    85.12
    """

    return default_resolver().rate_sync(spec)
