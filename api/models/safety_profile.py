from typing import List

from pydantic import BaseModel, Field

# Column order of the SMS summary row.
BASIC_CATEGORIES = (
    "Unsafe Driving",
    "Crash Indicator",
    "HOS Compliance",
    "Vehicle Maintenance",
    "Controlled Substances",
    "Hazmat Compliance",
    "Driver Fitness",
)


class BasicScore(BaseModel):
    category: str
    measure: str


class OosRate(BaseModel):
    type: str
    rate: str
    national_avg: str = Field(..., alias="nationalAvg")

    class Config:
        populate_by_name = True


class SafetyProfile(BaseModel):
    """Safety rating, BASIC measures and out-of-service rates from the SMS profile."""

    rating: str = "N/A"
    rating_date: str = Field("N/A", alias="ratingDate")
    basic_scores: List[BasicScore] = Field(default_factory=list, alias="basicScores", max_length=len(BASIC_CATEGORIES))
    oos_rates: List[OosRate] = Field(default_factory=list, alias="oosRates")

    class Config:
        populate_by_name = True
