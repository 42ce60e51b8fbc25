"""Exception types raised by the scraping services and mapped to HTTP responses in main.py."""

from typing import Optional


class ScraperError(Exception):
    """Base class for scraping failures surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class UpstreamUnavailableError(ScraperError):
    """The upstream document could not be fetched (network error, timeout, bad status)."""


class CarrierNotFoundError(ScraperError):
    """The upstream page rendered without a carrier profile container."""

    status_code = 404

    def __init__(self, mc_number: str):
        super().__init__("Carrier not found")
        self.mc_number = mc_number


def scrape_failed(message: str, exc: Exception) -> ScraperError:
    """Wrap any scraping exception into a 500 ScraperError carrying the underlying detail."""
    if isinstance(exc, ScraperError):
        details = f"{exc.message}: {exc.details}" if exc.details else exc.message
    else:
        details = str(exc)
    return ScraperError(message, details)
