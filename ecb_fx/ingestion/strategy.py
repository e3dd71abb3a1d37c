"""Abstractions for pluggable feed transports."""

from __future__ import annotations

from typing import Protocol

from ecb_fx.ingestion.models import FeedWindow


class FeedFetcher(Protocol):
    """Contract for retrieving a raw ECB feed document.

    Implementations download the payload for ``window`` and return it as text.
    They are called from a worker thread, so blocking I/O is fine. Transport
    failures must be raised as :class:`ecb_fx.errors.TransportError`.
    """

    def fetch(self, window: FeedWindow) -> str:
        ...  # pragma: no cover - protocol definition


__all__ = ["FeedFetcher"]
