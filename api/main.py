import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Request, Security, status
from fastapi.security import APIKeyHeader
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import db
from exceptions import ScraperError
from routes.scrape_routes import router as scrape_router
from routes.register_routes import router as register_router

# Configure logging based on settings
handlers = [logging.StreamHandler()]
if settings.log_file:
    Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
    handlers.append(logging.FileHandler(settings.log_file))

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)

# API Key Authentication
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def verify_api_key(api_key: Optional[str] = Security(api_key_header)):
    """Verify API key for authentication.

    Args:
        api_key: The API key from the X-API-Key header

    Returns:
        True if authentication successful

    Raises:
        HTTPException: If API key is invalid or missing
    """
    if not settings.api_key:  # If no API key is set, allow all requests (dev mode)
        return True
    if not api_key or api_key != settings.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key"
        )
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown events."""
    # Startup
    logger.info("Starting FMCSA Scraper API...")
    if db.is_configured:
        if db.verify_connectivity():
            logger.info("Successfully connected to Neo4j database")
            db.ensure_schema()
        else:
            logger.warning("Cannot connect to Neo4j database")

    yield

    # Shutdown
    logger.info("Shutting down FMCSA Scraper API...")
    db.close()


# OpenAPI tags for better documentation organization
tags_metadata = [
    {
        "name": "health",
        "description": "Health check endpoint for monitoring API status",
    },
    {
        "name": "scrape",
        "description": "On-demand scraping of carrier snapshots, safety profiles and insurance filings",
    },
    {
        "name": "register",
        "description": "Decisions published on the FMCSA daily register",
    },
]

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="""
    ## Overview
    Scrapes public FMCSA registries (SAFER company snapshots, SMS safety profiles,
    SearchCarriers insurance filings and the daily FMCSA register) and returns
    normalized, de-duplicated records.

    ## Authentication
    Use the `X-API-Key` header when the server is configured with an API key.
    """,
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint (no auth required)
@app.get("/health",
         tags=["health"],
         summary="Health Check",
         description="Check that the API is running",
         response_description="Health status information")
async def health_check():
    """Check API health status.

    Returns:
        dict: Status and a short message
    """
    return {
        "status": "ok",
        "message": "FMCSA Scraper Backend is running"
    }


# Include routers with authentication
app.include_router(
    scrape_router,
    dependencies=[Depends(verify_api_key)]
)

app.include_router(
    register_router,
    dependencies=[Depends(verify_api_key)]
)


# Error handlers
@app.exception_handler(ScraperError)
async def scraper_error_handler(request: Request, exc: ScraperError):
    """Render scraping failures as {error} or {error, details}.

    Args:
        request: The incoming request
        exc: The exception that was raised
    """
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)
