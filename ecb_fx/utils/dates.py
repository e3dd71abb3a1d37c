"""Day-level date helpers used for cache keys and feed window selection."""

from __future__ import annotations

import math
from datetime import date, datetime, timezone

from ecb_fx.errors import InvalidDateError
from ecb_fx.ingestion.models import FeedWindow
from ecb_fx.settings import RECENT_WINDOW_DAYS

DateLike = date | datetime | str | int | float


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def normalize_date(value: DateLike) -> date:
    """Collapse ``value`` to the UTC calendar day it falls on.

    Accepts :class:`date`, :class:`datetime` (naive values are read as UTC),
    ISO-8601 strings and POSIX timestamps in seconds.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise InvalidDateError(f"Unsupported date value: {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise InvalidDateError(f"Timestamp is not a finite number: {value!r}")
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidDateError(f"Timestamp out of range: {value!r}") from exc
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDateError(f"Unparseable date string: {value!r}") from exc
        return normalize_date(parsed)
    raise InvalidDateError(f"Unsupported date value: {value!r}")


def select_window(
    day: date,
    is_current_date: bool,
    *,
    today: date,
    recent_days: int = RECENT_WINDOW_DAYS,
) -> FeedWindow:
    """Pick the smallest ECB feed that can contain ``day``."""

    if is_current_date:
        return FeedWindow.CURRENT
    if (today - day).days < recent_days:
        return FeedWindow.RECENT
    return FeedWindow.FULL


__all__ = ["DateLike", "normalize_date", "select_window", "utc_now"]
