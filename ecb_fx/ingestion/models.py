"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict

RateTable = Dict[str, float]
RateBatch = Dict[date, RateTable]


class FeedWindow(str, Enum):
    """Upstream ECB feeds, each fetched and deduplicated independently."""

    CURRENT = "current"
    RECENT = "recent"
    FULL = "full"


@dataclass(slots=True, frozen=True)
class EcbRateRecord:
    """Representation of a single currency rate extracted from an ECB feed."""

    rate_date: date
    currency: str
    rate: float


__all__ = ["EcbRateRecord", "FeedWindow", "RateBatch", "RateTable"]
