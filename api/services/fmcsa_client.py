"""
HTTP client for the upstream registries scraped by the API.

Fetches raw documents from SAFER, SMS, SearchCarriers and the FMCSA register
with browser-like headers. Failures are raised as UpstreamUnavailableError
and never retried here; callers own retry and backoff.
"""

import logging
from typing import Any, Dict, Optional

import requests

from config import settings
from exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class FMCSAClient:
    """Client for fetching carrier, safety, insurance and register documents.

    Args:
        session: Optional requests session, a new one is created otherwise
        config: Settings object, defaults to the application settings
    """

    def __init__(self, session: Optional[requests.Session] = None, config=None):
        self.settings = config or settings
        self.session = session or requests.Session()
        self.headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": self.settings.accept_language,
        }

    def _get(self, url: str, timeout: float, params: Optional[Dict] = None,
             headers: Optional[Dict] = None) -> requests.Response:
        """Make a GET request to an upstream source.

        Args:
            url: Absolute URL
            timeout: Seconds before the request is abandoned
            params: Query parameters
            headers: Headers overriding the defaults

        Returns:
            requests.Response: Successful (2xx) response

        Raises:
            UpstreamUnavailableError: On connection errors, timeouts and non-2xx statuses
        """
        logger.info(f"Fetching {url}")
        try:
            response = self.session.get(
                url,
                params=params,
                headers={**self.headers, **(headers or {})},
                timeout=timeout
            )
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            logger.error(f"Timed out after {timeout}s fetching {url}")
            raise UpstreamUnavailableError(f"Timed out fetching {url}", str(e)) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise UpstreamUnavailableError(f"Failed to fetch {url}", str(e)) from e

    def fetch_carrier_snapshot(self, mc_number: str) -> str:
        """Fetch the SAFER company snapshot for an MC/MX number."""
        params = {
            "searchtype": "ANY",
            "query_type": "queryCarrierSnapshot",
            "query_param": "MC_MX",
            "query_string": mc_number,
        }
        response = self._get(f"{self.settings.safer_base_url}/query.asp",
                             self.settings.lookup_timeout, params=params)
        return response.text

    def fetch_carrier_registration(self, dot_number: str) -> str:
        """Fetch the SMS carrier registration page (holds the contact email)."""
        url = f"{self.settings.sms_base_url}/Carrier/{dot_number}/CarrierRegistration.aspx"
        return self._get(url, self.settings.registration_timeout).text

    def fetch_safety_profile(self, dot_number: str) -> str:
        """Fetch the SMS complete profile page for a USDOT number."""
        url = f"{self.settings.sms_base_url}/Carrier/{dot_number}/CompleteProfile.aspx"
        return self._get(url, self.settings.lookup_timeout).text

    def fetch_insurance(self, dot_number: str) -> Any:
        """Fetch the SearchCarriers insurance listing as decoded JSON.

        Raises:
            UpstreamUnavailableError: Also when the body is not valid JSON
        """
        url = f"{self.settings.searchcarriers_base_url}/company/{dot_number}/insurances"
        response = self._get(url, self.settings.lookup_timeout, headers={"Accept": "application/json"})
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise UpstreamUnavailableError(f"Invalid JSON from {url}", str(e)) from e

    def fetch_register(self) -> str:
        """Fetch the FMCSA register detail page (the last few days of decisions)."""
        return self._get(self.settings.register_url, self.settings.register_timeout).text
