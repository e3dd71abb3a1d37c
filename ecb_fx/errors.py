"""Exception hierarchy raised by the rate resolver."""

from __future__ import annotations

from datetime import date

__all__ = [
    "FxRateError",
    "TransportError",
    "ParseError",
    "NoDataError",
    "UnknownCurrencyError",
    "InvalidCurrencySpecError",
    "InvalidDateError",
]


class FxRateError(Exception):
    """Base class for every failure surfaced by :mod:`ecb_fx`."""


class TransportError(FxRateError):
    """The ECB feed could not be reached or answered with a non-success status."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(FxRateError, ValueError):
    """The feed payload does not have the expected envelope/cube structure."""


class NoDataError(FxRateError):
    """Neither the requested day nor an acceptable earlier day is available."""

    def __init__(self, day: date, *, exact_date: bool = False) -> None:
        qualifier = "exact date " if exact_date else ""
        super().__init__(f"No data for {qualifier}{day.isoformat()}")
        self.day = day
        self.exact_date = exact_date


class UnknownCurrencyError(FxRateError, KeyError):
    """A requested currency code is absent from the resolved rate table."""

    def __init__(self, currency: str) -> None:
        super().__init__(currency)
        self.currency = currency

    def __str__(self) -> str:
        return f"Unknown currency {self.currency!r}"


class InvalidCurrencySpecError(FxRateError, ValueError):
    """The currency specifier is neither ``CODE`` nor ``BASE/QUOTE``."""


class InvalidDateError(FxRateError, ValueError):
    """The requested date cannot be reduced to a calendar day."""
