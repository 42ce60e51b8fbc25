"""
Parsers for the SAFER company snapshot and the SMS carrier registration page.
"""

import logging
from datetime import date
from typing import Optional

from bs4 import BeautifulSoup

from exceptions import CarrierNotFoundError
from models.carrier_profile import CarrierProfile
from parsers.html_tables import find_marked, find_value_by_label
from utils.text import clean_text, decode_cf_email

logger = logging.getLogger(__name__)

# CarrierProfile field -> SAFER snapshot label
SNAPSHOT_LABELS = {
    "dot_number": "USDOT Number:",
    "legal_name": "Legal Name:",
    "dba_name": "DBA Name:",
    "entity_type": "Entity Type:",
    "status": "Operating Authority Status:",
    "phone": "Phone:",
    "power_units": "Power Units:",
    "non_cmv_units": "Non-CMV Units:",
    "drivers": "Drivers:",
    "physical_address": "Physical Address:",
    "mailing_address": "Mailing Address:",
    "mcs150_date": "MCS-150 Form Date:",
    "mcs150_mileage": "MCS-150 Mileage (Year):",
    "out_of_service_date": "Out of Service Date:",
    "state_carrier_id": "State Carrier ID Number:",
    "duns_number": "DUNS Number:",
}

# CarrierProfile field -> summary attribute of the checkbox table
SNAPSHOT_CHECKBOX_GROUPS = {
    "operation_classification": "Operation Classification",
    "carrier_operation": "Carrier Operation",
    "cargo_carried": "Cargo Carried",
}


def format_scrape_date(day: date) -> str:
    """Render a date as M/D/YYYY without zero padding."""
    return f"{day.month}/{day.day}/{day.year}"


def parse_carrier_snapshot(html: str, mc_number: str, scraped_on: Optional[date] = None) -> CarrierProfile:
    """Build a CarrierProfile from a SAFER snapshot page.

    Args:
        html: Snapshot page body
        mc_number: MC number the page was requested for
        scraped_on: Date to stamp on the profile, defaults to today

    Returns:
        CarrierProfile: Profile with "" for every label missing from the page

    Raises:
        CarrierNotFoundError: If the page has no profile container
    """
    soup = BeautifulSoup(html, "html.parser")

    # SAFER wraps a found carrier in <center>; the "no record" page has none.
    if soup.find("center") is None:
        raise CarrierNotFoundError(mc_number)

    fields = {
        name: find_value_by_label(soup, label)
        for name, label in SNAPSHOT_LABELS.items()
    }
    for name, summary in SNAPSHOT_CHECKBOX_GROUPS.items():
        fields[name] = find_marked(soup, summary)

    profile = CarrierProfile(
        mc_number=mc_number,
        date_scraped=format_scrape_date(scraped_on or date.today()),
        **fields
    )
    logger.debug(f"Parsed snapshot for MC {mc_number}: DOT {profile.dot_number or 'unknown'}")
    return profile


def parse_registration_email(html: str) -> str:
    """Extract the contact email from an SMS carrier registration page.

    The address is usually hidden behind Cloudflare email obfuscation in a
    data-cfemail attribute next to the "Email:" label; plain-text addresses
    are accepted too.

    Returns:
        str: Email address or "" if none is shown
    """
    soup = BeautifulSoup(html, "html.parser")

    for label in soup.find_all("label"):
        if "Email:" not in label.get_text():
            continue

        container = label.parent
        protected = container.find(attrs={"data-cfemail": True})
        if protected is not None:
            return decode_cf_email(protected.get("data-cfemail", ""))

        text = clean_text(container.get_text().replace("Email:", ""))
        return text if "@" in text else ""

    return ""
