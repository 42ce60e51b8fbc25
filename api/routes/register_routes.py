import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from exceptions import scrape_failed
from models.register_entry import RegisterResponse
from services.scrape_service import ScrapeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["register"])

scrape_service = ScrapeService()


@router.get("/fmcsa-register",
            response_model=RegisterResponse,
            summary="Scrape the FMCSA register",
            description="Returns the de-duplicated decisions listed on the FMCSA daily register. "
                        "An empty page is reported as success with no entries.")
def get_fmcsa_register():
    """Scrape the daily register.

    Returns:
        RegisterResponse: success, count, lastUpdated and entries; on failure a
        500 with success false, error, details and an empty entries list
    """
    try:
        return scrape_service.scrape_register()
    except Exception as e:
        logger.error(f"FMCSA register scrape error: {e}")
        failure = scrape_failed("Failed to scrape FMCSA register data", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": failure.message,
                "details": failure.details,
                "entries": []
            }
        )
