"""Ingestion helpers for the ECB euro foreign exchange reference rates."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List

import requests
from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from ecb_fx.errors import ParseError, TransportError
from ecb_fx.ingestion.models import EcbRateRecord, FeedWindow, RateBatch
from ecb_fx.settings import ResolverSettings
from ecb_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class EcbFeedParseResult:
    rows: list[EcbRateRecord]
    skipped_days: list[str] = field(default_factory=list)

    def to_batch(self) -> RateBatch:
        """Group the parsed rows into one rate table per day."""

        return group_rows_by_date(self.rows)


def group_rows_by_date(rows: Iterable[EcbRateRecord]) -> RateBatch:
    grouped: Dict[date, Dict[str, float]] = {}
    for row in rows:
        grouped.setdefault(row.rate_date, {})[row.currency] = row.rate
    return grouped


def _coerce_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _parse_rate(value: str | None, currency: str, day: date) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid rate {value!r} for {currency} on {day.isoformat()}") from exc


def parse_ecb_feed(xml: str | bytes) -> EcbFeedParseResult:
    """Parse an ECB ``eurofxref`` document into rate records.

    The daily, 90-day and full-history feeds share one layout: a
    ``gesmes:Envelope`` holding an outer ``Cube`` with one dated ``Cube`` per
    business day, each listing ``Cube currency=... rate=...`` children. The
    HTML parser lower-cases tag and attribute names, hence the lookups below.
    Dated cubes whose ``time`` is not a valid date are skipped.
    """

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(xml, "html.parser")
    envelope = soup.find("gesmes:envelope")
    if envelope is None:
        raise ParseError("Feed payload is missing the gesmes:Envelope element")
    day_cubes = envelope.find_all("cube", attrs={"time": True})
    if not day_cubes:
        raise ParseError("Feed payload does not contain any dated Cube entries")

    rows: List[EcbRateRecord] = []
    skipped: List[str] = []
    for day_cube in day_cubes:
        rate_date = _coerce_date(day_cube.get("time"))
        if rate_date is None:
            skipped.append(str(day_cube.get("time")))
            continue
        for currency_cube in day_cube.find_all("cube", attrs={"currency": True}):
            currency = currency_cube["currency"].strip()
            rows.append(
                EcbRateRecord(
                    rate_date=rate_date,
                    currency=currency,
                    rate=_parse_rate(currency_cube.get("rate"), currency, rate_date),
                )
            )
    if skipped:
        LOGGER.debug("Skipped %s ECB cubes with invalid dates: %s", len(skipped), skipped)
    return EcbFeedParseResult(rows=rows, skipped_days=skipped)


class EcbFeedClient:
    """Blocking ``requests`` transport for the three ECB feeds."""

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or ResolverSettings()
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", self.settings.user_agent)

    def fetch(self, window: FeedWindow) -> str:
        """Download the raw XML document for ``window``."""

        url = self.settings.url_for(window)
        try:
            response = self.session.get(url, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Unable to reach ECB feed {url}: {exc}", url=url) from exc
        self._raise_with_context(response, url)
        LOGGER.info("Fetched %s ECB feed from %s", window.value, url)
        return response.text

    @staticmethod
    def _raise_with_context(response: requests.Response, url: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = response.status_code
            raise TransportError(
                f"ECB feed responded with HTTP {status} for {url}.", url=url, status=status
            ) from exc

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "EcbFeedClient":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # pragma: no cover - trivial
        self.close()


__all__ = ["EcbFeedClient", "EcbFeedParseResult", "group_rows_by_date", "parse_ecb_feed"]
