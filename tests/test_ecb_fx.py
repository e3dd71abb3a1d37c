"""Tests for the public package facade."""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

import ecb_fx
from ecb_fx import FxRateResolver, __version__
from ecb_fx.ingestion.ecb import EcbFeedClient
from ecb_fx.ingestion.models import FeedWindow

from conftest import FakeFetcher, build_feed


def test_public_api_is_exposed() -> None:
    assert isinstance(__version__, str)
    for name in ecb_fx.__all__:
        assert hasattr(ecb_fx, name)


def test_resolver_defaults_to_ecb_client() -> None:
    resolver = FxRateResolver()

    assert isinstance(resolver.fetcher, EcbFeedClient)
    assert resolver.fetcher.settings is resolver.settings
    assert len(resolver.cache) == 0


@pytest.fixture()
def default_resolver(monkeypatch: pytest.MonkeyPatch) -> FxRateResolver:
    fetcher = FakeFetcher(
        {FeedWindow.CURRENT: build_feed({date(2024, 6, 12): {"JPY": 169.55, "BGN": 1.9558}})}
    )
    resolver = FxRateResolver(fetcher=fetcher)
    monkeypatch.setattr("ecb_fx._DEFAULT_RESOLVER", resolver)
    return resolver


def test_default_resolver_is_created_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("ecb_fx._DEFAULT_RESOLVER", None)

    first = ecb_fx.default_resolver()

    assert ecb_fx.default_resolver() is first


def test_get_fx_rate_uses_default_resolver(default_resolver: FxRateResolver) -> None:
    assert ecb_fx.get_fx_rate("JPY") == 169.55
    assert asyncio.run(ecb_fx.get_fx_rate_async("JPY/BGN")) == 169.55 / 1.9558
    assert default_resolver.fetcher.calls == [FeedWindow.CURRENT]
