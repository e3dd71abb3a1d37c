"""CLI for looking up an ECB reference rate."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from ecb_fx.errors import FxRateError
from ecb_fx.query import RateQuery
from ecb_fx.resolver import FxRateResolver
from ecb_fx.settings import ResolverSettings
from ecb_fx.utils.dates import normalize_date
from ecb_fx.utils.logger import configure_logging

__all__ = ["build_query", "main", "parse_args"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("currency", help="Currency code (JPY) or pair (JPY/BGN)")
    parser.add_argument("--date", dest="date", help="Rate date (YYYY-MM-DD); defaults to today")
    parser.add_argument(
        "--exact-date",
        dest="exact_date",
        action="store_true",
        help="Fail instead of falling back to the nearest earlier day",
    )
    parser.add_argument(
        "--ignore-cache",
        dest="ignore_cache",
        action="store_true",
        help="Always fetch the feed instead of reading cached days",
    )
    parser.add_argument(
        "--dont-store-cache",
        dest="dont_store_cache",
        action="store_true",
        help="Do not keep freshly fetched days in the cache",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Log cache and feed activity",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=float,
        default=ResolverSettings().timeout,
        help="HTTP timeout in seconds",
    )
    return parser.parse_args(argv)


def build_query(args: argparse.Namespace) -> RateQuery:
    return RateQuery(
        currency=args.currency,
        date=normalize_date(args.date) if args.date else None,
        exact_date=args.exact_date,
        ignore_cache=args.ignore_cache,
        dont_store_cache=args.dont_store_cache,
    )


def main(argv: Sequence[str] | None = None, *, resolver: FxRateResolver | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    resolver = resolver or FxRateResolver(ResolverSettings(timeout=args.timeout))
    try:
        query = build_query(args)
        rate = resolver.rate_sync(query)
    except FxRateError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(rate)
    return 0


if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(main())
