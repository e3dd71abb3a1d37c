"""In-memory store of per-day rate tables and the shared fallback search."""

from __future__ import annotations

import threading
from datetime import date
from types import MappingProxyType
from typing import Dict, Iterator, Mapping

from ecb_fx.ingestion.models import RateTable


def find_rate_day(
    tables: Mapping[date, RateTable],
    day: date,
    *,
    exact_only: bool = False,
) -> date | None:
    """Return the key in ``tables`` that should answer a request for ``day``.

    An exact match always wins. Otherwise, unless ``exact_only`` is set, the
    greatest known day strictly before ``day`` is used. ``None`` means the
    mapping cannot answer.
    """

    if day in tables:
        return day
    if exact_only:
        return None
    earlier = [known for known in tables if known < day]
    if not earlier:
        return None
    return max(earlier)


class RateCache:
    """Process-lifetime mapping of day to rate table.

    Entries are never evicted; writing a day that is already present replaces
    its table. Reads and writes are serialised so the cache can be shared by
    resolvers called from several threads.
    """

    __slots__ = ("_tables", "_lock")

    def __init__(self, tables: Mapping[date, RateTable] | None = None) -> None:
        self._tables: Dict[date, RateTable] = {}
        self._lock = threading.RLock()
        if tables:
            self.merge(tables)

    def __contains__(self, day: object) -> bool:
        return day in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[date]:
        return iter(self.days())

    def get(self, day: date) -> RateTable | None:
        return self._tables.get(day)

    def store(self, day: date, table: Mapping[str, float]) -> None:
        frozen = MappingProxyType(dict(table))
        with self._lock:
            self._tables[day] = frozen  # type: ignore[assignment]

    def merge(self, batch: Mapping[date, Mapping[str, float]]) -> int:
        """Store every table in ``batch`` and return how many days were written."""

        with self._lock:
            for day, table in batch.items():
                self.store(day, table)
        return len(batch)

    def lookup(self, day: date, *, exact_only: bool = False) -> tuple[date, RateTable] | None:
        """Search the cache with the same rules used for fresh batches."""

        with self._lock:
            matched = find_rate_day(self._tables, day, exact_only=exact_only)
            if matched is None:
                return None
            return matched, self._tables[matched]

    def days(self) -> list[date]:
        with self._lock:
            return sorted(self._tables)

    def copy(self) -> Dict[date, RateTable]:
        """Point-in-time copy of the cached tables."""

        with self._lock:
            return dict(self._tables)

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()


__all__ = ["RateCache", "find_rate_day"]
