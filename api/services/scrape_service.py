"""
Scrape Service.

Fetches upstream documents through FMCSAClient and turns them into typed
records with the parsers. Parsing never fails on missing data: absent
fields come back empty. Fetch failures propagate as UpstreamUnavailableError,
except for the secondary email lookup, which is best-effort.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from exceptions import ScraperError
from models.carrier_profile import CarrierProfile
from models.insurance_policy import InsuranceLookup
from models.register_entry import RegisterResponse
from models.safety_profile import SafetyProfile
from parsers.carrier_parser import parse_carrier_snapshot, parse_registration_email
from parsers.insurance_normalizer import normalize_policies
from parsers.register_parser import parse_register
from parsers.safety_parser import parse_safety_profile
from services.fmcsa_client import FMCSAClient

logger = logging.getLogger(__name__)


class ScrapeService:
    """Stateless facade over the upstream client and the document parsers."""

    def __init__(self, client: Optional[FMCSAClient] = None):
        self.client = client or FMCSAClient()

    def scrape_carrier(self, mc_number: str) -> CarrierProfile:
        """Scrape a carrier's SAFER snapshot and, when possible, its contact email.

        Raises:
            CarrierNotFoundError: If SAFER has no profile for the MC number
            UpstreamUnavailableError: If the snapshot cannot be fetched
        """
        logger.info(f"Scraping carrier MC {mc_number}")
        html = self.client.fetch_carrier_snapshot(mc_number)
        profile = parse_carrier_snapshot(html, mc_number)

        if profile.dot_number:
            profile.email = self.lookup_email(profile.dot_number)

        return profile

    def lookup_email(self, dot_number: str) -> str:
        """Best-effort email lookup; failures are logged and yield ""."""
        try:
            html = self.client.fetch_carrier_registration(dot_number)
            return parse_registration_email(html)
        except ScraperError as e:
            logger.warning(f"Email lookup failed for DOT {dot_number}: {e.message} ({e.details})")
        except Exception as e:
            logger.warning(f"Email lookup failed for DOT {dot_number}: {e}", exc_info=True)
        return ""

    def scrape_safety(self, dot_number: str) -> SafetyProfile:
        """Scrape the SMS safety rating, BASIC measures and OOS rates."""
        logger.info(f"Scraping safety profile for DOT {dot_number}")
        return parse_safety_profile(self.client.fetch_safety_profile(dot_number))

    def scrape_insurance(self, dot_number: str) -> InsuranceLookup:
        """Fetch and normalize insurance filings, keeping the raw payload."""
        logger.info(f"Scraping insurance for DOT {dot_number}")
        payload = self.client.fetch_insurance(dot_number)
        policies = normalize_policies(dot_number, payload)
        logger.info(f"Normalized {len(policies)} insurance policies for DOT {dot_number}")
        return InsuranceLookup(policies=policies, raw=payload)

    def scrape_register(self) -> RegisterResponse:
        """Scrape the daily register. An empty result is still a success."""
        entries = parse_register(self.client.fetch_register())
        return RegisterResponse(
            success=True,
            count=len(entries),
            last_updated=datetime.now(timezone.utc).isoformat(),
            entries=entries
        )


def scrape_summary(service: ScrapeService, mc_number: str, include_safety: bool = False,
                   include_insurance: bool = False) -> Dict:
    """Scrape one carrier plus optional safety and insurance data.

    Safety and insurance lookups need the DOT number from the snapshot and
    are skipped when it is missing.

    Returns:
        dict: {"carrier": CarrierProfile, "safety": SafetyProfile|None, "insurance": InsuranceLookup|None}
    """
    carrier = service.scrape_carrier(mc_number)
    result = {"carrier": carrier, "safety": None, "insurance": None}

    if carrier.dot_number:
        if include_safety:
            result["safety"] = service.scrape_safety(carrier.dot_number)
        if include_insurance:
            result["insurance"] = service.scrape_insurance(carrier.dot_number)

    return result
