from __future__ import annotations

import threading
from datetime import date, datetime, timezone
from typing import Callable, Mapping

import pytest

from ecb_fx.errors import TransportError
from ecb_fx.ingestion.models import FeedWindow
from ecb_fx.resolver import FxRateResolver

FIXED_NOW = datetime(2024, 6, 12, 15, 30, tzinfo=timezone.utc)


def build_feed(days: Mapping[date, Mapping[str, float]]) -> str:
    cubes = []
    for day, rates in days.items():
        rows = "".join(
            f"<Cube currency='{code}' rate='{rate}'/>" for code, rate in rates.items()
        )
        cubes.append(f"<Cube time='{day.isoformat()}'>{rows}</Cube>")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01" '
        'xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">'
        "<gesmes:subject>Reference rates</gesmes:subject>"
        "<gesmes:Sender><gesmes:name>European Central Bank</gesmes:name></gesmes:Sender>"
        f"<Cube>{''.join(cubes)}</Cube>"
        "</gesmes:Envelope>"
    )


class FakeFetcher:
    """In-memory feed transport counting calls per window."""

    def __init__(self, feeds: Mapping[FeedWindow, str] | None = None) -> None:
        self.feeds = dict(feeds or {})
        self.calls: list[FeedWindow] = []
        self.failures: dict[FeedWindow, int] = {}
        self.gate: threading.Event | None = None

    def fail_next(self, window: FeedWindow, times: int = 1) -> None:
        self.failures[window] = times

    def fetch(self, window: FeedWindow) -> str:
        self.calls.append(window)
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.failures.get(window):
            self.failures[window] -= 1
            raise TransportError("feed unavailable", url=f"fake://{window.value}")
        if window not in self.feeds:
            raise TransportError("no such feed", url=f"fake://{window.value}", status=404)
        return self.feeds[window]


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def make_resolver(fake_fetcher: FakeFetcher) -> Callable[..., FxRateResolver]:
    def _factory(**kwargs) -> FxRateResolver:
        kwargs.setdefault("fetcher", fake_fetcher)
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        return FxRateResolver(**kwargs)

    return _factory
