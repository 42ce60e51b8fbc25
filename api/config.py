"""Configuration management using Pydantic Settings."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden using environment variables or .env file.
    """

    # Neo4j Database Configuration (optional, only used for persistence)
    neo4j_uri: str = Field(
        default="bolt://localhost:7687",
        description="Neo4j database connection URI"
    )
    neo4j_user: str = Field(
        default="neo4j",
        description="Neo4j username"
    )
    neo4j_password: Optional[str] = Field(
        default=None,
        description="Neo4j password. Persistence is unavailable when unset"
    )

    # API Configuration
    api_key: Optional[str] = Field(
        default=None,
        description="API key for authentication. If not set, authentication is disabled (dev mode)"
    )

    # Upstream Sources
    safer_base_url: str = Field(
        default="https://safer.fmcsa.dot.gov",
        description="SAFER company snapshot site"
    )
    sms_base_url: str = Field(
        default="https://ai.fmcsa.dot.gov/SMS",
        description="SMS safety measurement site"
    )
    searchcarriers_base_url: str = Field(
        default="https://searchcarriers.com",
        description="SearchCarriers insurance lookup site"
    )
    register_url: str = Field(
        default="https://li-public.fmcsa.dot.gov/LIVIEW/PKG_register.prc_reg_detail",
        description="FMCSA daily register detail page"
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="Browser user agent sent to upstream sources"
    )
    accept_language: str = Field(
        default="en-US,en;q=0.5",
        description="Accept-Language header sent to upstream sources"
    )

    # Timeouts (seconds)
    lookup_timeout: float = Field(
        default=15.0,
        description="Timeout for carrier, safety and insurance lookups"
    )
    registration_timeout: float = Field(
        default=10.0,
        description="Timeout for the secondary carrier registration (email) lookup"
    )
    register_timeout: float = Field(
        default=30.0,
        description="Timeout for the daily register page"
    )

    # Batch scraping
    batch_concurrency: int = Field(
        default=4,
        ge=1,
        description="Maximum number of carriers scraped at once in batch mode"
    )
    batch_item_timeout: float = Field(
        default=60.0,
        description="Timeout for a single carrier in batch mode"
    )

    # Application Settings
    app_name: str = Field(
        default="FMCSA Scraper API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file. Logs only go to stderr when unset"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

        # Allow extra fields from environment
        extra = "ignore"

        # Example values for documentation
        json_schema_extra = {
            "example": {
                "neo4j_uri": "bolt://localhost:7687",
                "neo4j_user": "neo4j",
                "neo4j_password": "secure_password",
                "api_key": "your_api_key_here",
                "lookup_timeout": 15.0,
                "register_timeout": 30.0,
                "debug": False,
                "log_level": "INFO"
            }
        }


# Create a singleton instance
settings = Settings()
