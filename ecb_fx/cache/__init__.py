"""Rate table caching helpers."""

from __future__ import annotations

from ecb_fx.cache.rate_cache import RateCache, find_rate_day

__all__ = ["RateCache", "find_rate_day"]
