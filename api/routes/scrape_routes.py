"""
Scrape routes for carrier snapshots, safety profiles and insurance filings.

Each endpoint fetches the upstream document on request and returns the
normalized record. Missing carriers map to 404, fetch and parse failures
to 500 with the underlying detail.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from exceptions import CarrierNotFoundError, scrape_failed
from models.carrier_profile import CarrierProfile
from models.error_response import ErrorResponse
from models.insurance_policy import InsuranceLookup
from models.safety_profile import SafetyProfile
from services.scrape_service import ScrapeService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/scrape",
    tags=["scrape"],
    responses={500: {"model": ErrorResponse, "description": "Upstream fetch or parse failure"}}
)

scrape_service = ScrapeService()


@router.get("/carrier/{mc_number}",
            response_model=CarrierProfile,
            responses={404: {"model": ErrorResponse, "description": "No carrier profile rendered"}},
            summary="Scrape carrier snapshot",
            description="Scrapes the SAFER company snapshot for an MC/MX number, plus the SMS contact email")
def scrape_carrier(
    mc_number: str,
    use_proxy: Optional[str] = Query(None, alias="useProxy", description="Accepted for client compatibility, ignored")
):
    """Scrape a carrier profile by MC number.

    Args:
        mc_number: MC/MX docket number (digits only)

    Returns:
        CarrierProfile: Flat carrier record

    Raises:
        CarrierNotFoundError: 404 if SAFER has no profile for the number
        ScraperError: 500 on fetch or parse failure
    """
    try:
        return scrape_service.scrape_carrier(mc_number)
    except CarrierNotFoundError:
        raise
    except Exception as e:
        logger.error(f"Carrier scrape error for MC {mc_number}: {e}")
        raise scrape_failed("Failed to scrape carrier data", e) from e


@router.get("/safety/{dot_number}",
            response_model=SafetyProfile,
            summary="Scrape safety profile",
            description="Scrapes the SMS safety rating, BASIC measures and out-of-service rates")
def scrape_safety(dot_number: str):
    """Scrape the safety profile for a USDOT number."""
    try:
        return scrape_service.scrape_safety(dot_number)
    except Exception as e:
        logger.error(f"Safety scrape error for DOT {dot_number}: {e}")
        raise scrape_failed("Failed to scrape safety data", e) from e


@router.get("/insurance/{dot_number}",
            response_model=InsuranceLookup,
            summary="Scrape insurance filings",
            description="Fetches SearchCarriers insurance filings and returns normalized policies with the raw payload")
def scrape_insurance(dot_number: str):
    """Scrape and normalize insurance policies for a USDOT number."""
    try:
        return scrape_service.scrape_insurance(dot_number)
    except Exception as e:
        logger.error(f"Insurance scrape error for DOT {dot_number}: {e}")
        raise scrape_failed("Failed to scrape insurance data", e) from e
