"""Rate resolution with day-level caching and shared in-flight feed fetches."""

from __future__ import annotations

import asyncio
import threading
from collections import ChainMap
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Dict, Mapping

from ecb_fx.cache.rate_cache import RateCache, find_rate_day
from ecb_fx.calculator import compute_rate
from ecb_fx.errors import NoDataError
from ecb_fx.ingestion.ecb import EcbFeedClient, parse_ecb_feed
from ecb_fx.ingestion.models import FeedWindow, RateBatch, RateTable
from ecb_fx.ingestion.strategy import FeedFetcher
from ecb_fx.query import RateRequest, RateSpec
from ecb_fx.settings import ResolverSettings
from ecb_fx.utils.dates import select_window, utc_now
from ecb_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


class FetchCoordinator:
    """Run at most one upstream fetch per feed window.

    Slots hold :class:`concurrent.futures.Future` objects guarded by a lock, so
    callers on different threads or event loops (``rate_sync`` runs one loop
    per call) join the same download. The download and parse run on the
    coordinator's own worker threads and always run to completion. A slot is
    released before its outcome reaches any caller, so a failed fetch never
    blocks the next attempt.
    """

    def __init__(self, fetcher: FeedFetcher) -> None:
        self.fetcher = fetcher
        self.fetch_count = 0
        self.shared_count = 0
        self._lock = threading.Lock()
        self._pending: Dict[FeedWindow, Future[RateBatch]] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=len(FeedWindow), thread_name_prefix="ecb-fx-fetch"
        )

    def is_pending(self, window: FeedWindow) -> bool:
        with self._lock:
            return window in self._pending

    async def fetch(self, window: FeedWindow) -> RateBatch:
        """Return the parsed batch for ``window``, joining an in-flight fetch."""

        with self._lock:
            future = self._pending.get(window)
            if future is None:
                self.fetch_count += 1
                future = Future()
                self._pending[window] = future
                self._executor.submit(self._run, window, future)
            else:
                self.shared_count += 1
                LOGGER.debug("Joining in-flight %s feed fetch", window.value)
        # Shielded so a cancelled caller does not cancel the fetch other callers share.
        return await asyncio.shield(asyncio.wrap_future(future))

    def _run(self, window: FeedWindow, future: Future[RateBatch]) -> None:
        LOGGER.info("Fetching %s ECB feed", window.value)
        try:
            batch = self._download(window)
        except BaseException as exc:  # every outcome must settle the shared future
            self._release(window, future)
            future.set_exception(exc)
            return
        self._release(window, future)
        LOGGER.info("Loaded %s days from %s ECB feed", len(batch), window.value)
        future.set_result(batch)

    def _release(self, window: FeedWindow, future: Future[RateBatch]) -> None:
        with self._lock:
            if self._pending.get(window) is future:
                del self._pending[window]

    def _download(self, window: FeedWindow) -> RateBatch:
        payload = self.fetcher.fetch(window)
        return parse_ecb_feed(payload).to_batch()

    def close(self) -> None:
        self._executor.shutdown(wait=False)


class FxRateResolver:
    """Resolve ECB reference rates for a day, caching every fetched day.

    Each resolver owns its cache and in-flight fetch slots; build one per
    isolated context (tests typically build one per case). A resolver may be
    shared between threads and event loops.
    """

    __slots__ = ("settings", "fetcher", "cache", "clock", "coordinator")

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        *,
        fetcher: FeedFetcher | None = None,
        cache: RateCache | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings or ResolverSettings()
        self.fetcher: FeedFetcher = fetcher or EcbFeedClient(self.settings)
        self.cache = cache if cache is not None else RateCache()
        self.clock = clock
        self.coordinator = FetchCoordinator(self.fetcher)

    def build_request(self, spec: RateSpec, *, now: datetime | None = None) -> RateRequest:
        return RateRequest.from_spec(spec, now=now if now is not None else self.clock())

    async def rate(self, spec: RateSpec) -> float:
        """Return the rate described by ``spec``.

        ``spec`` is either a bare ``"JPY"`` / ``"JPY/BGN"`` string (today's
        rate) or a :class:`~ecb_fx.query.RateQuery` / mapping of options.
        """

        request = self.build_request(spec)
        table = await self.resolve_table(request)
        return compute_rate(table, request.codes)

    def rate_sync(self, spec: RateSpec) -> float:
        """Blocking wrapper around :meth:`rate`; not usable inside a running loop."""

        return asyncio.run(self.rate(spec))

    async def resolve_table(self, request: RateRequest) -> RateTable:
        """Return the rate table answering ``request``, fetching only on a cache miss."""

        if not request.ignore_cache:
            hit = self.cache.lookup(request.day, exact_only=request.exact_date)
            if hit is not None:
                matched, table = hit
                if matched != request.day:
                    LOGGER.debug("No cached rates for %s; using cached %s", request.day, matched)
                else:
                    LOGGER.debug("Cache hit for %s", request.day)
                return table

        window = select_window(
            request.day,
            request.is_current_date,
            today=request.today,
            recent_days=self.settings.recent_window_days,
        )
        batch = await self.coordinator.fetch(window)
        if request.stores_results:
            self.cache.merge(batch)

        tables: Mapping = batch if request.ignore_cache else ChainMap(batch, self.cache.copy())
        matched = find_rate_day(tables, request.day, exact_only=request.exact_date)
        if matched is None:
            raise NoDataError(request.day, exact_date=request.exact_date)
        if matched != request.day:
            LOGGER.debug("No %s feed rates for %s; using %s", window.value, request.day, matched)
        return tables[matched]


__all__ = ["Clock", "FetchCoordinator", "FxRateResolver"]
