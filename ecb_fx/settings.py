"""Runtime configuration for :class:`ecb_fx.FxRateResolver`."""

from __future__ import annotations

from dataclasses import dataclass

from ecb_fx.ingestion.models import FeedWindow

ECB_DAILY_URL = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-daily.xml"
ECB_90_DAYS_URL = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist-90d.xml"
ECB_HISTORY_URL = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist.xml"
RECENT_WINDOW_DAYS = 90


@dataclass(slots=True)
class ResolverSettings:
    """Feed locations and transport knobs used by a resolver instance."""

    daily_url: str = ECB_DAILY_URL
    recent_url: str = ECB_90_DAYS_URL
    history_url: str = ECB_HISTORY_URL
    timeout: float = 30.0
    recent_window_days: int = RECENT_WINDOW_DAYS
    user_agent: str = "ecb-fx-rates/0.1"

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.recent_window_days <= 0:
            raise ValueError("recent_window_days must be positive")

    def url_for(self, window: FeedWindow) -> str:
        """Return the feed URL serving ``window``."""

        if window is FeedWindow.CURRENT:
            return self.daily_url
        if window is FeedWindow.RECENT:
            return self.recent_url
        if window is FeedWindow.FULL:
            return self.history_url
        raise ValueError(f"Unsupported feed window: {window}")


__all__ = [
    "ECB_90_DAYS_URL",
    "ECB_DAILY_URL",
    "ECB_HISTORY_URL",
    "RECENT_WINDOW_DAYS",
    "ResolverSettings",
]
