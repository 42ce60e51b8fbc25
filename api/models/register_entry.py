from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class RegisterCategory(str, Enum):
    """Section headings of the FMCSA daily register, in classification priority order."""

    NAME_CHANGE = "NAME CHANGE"
    CERTIFICATE_PERMIT_LICENSE = "CERTIFICATE, PERMIT, LICENSE"
    CERTIFICATE_OF_REGISTRATION = "CERTIFICATE OF REGISTRATION"
    DISMISSAL = "DISMISSAL"
    WITHDRAWAL = "WITHDRAWAL"
    REVOCATION = "REVOCATION"
    MISCELLANEOUS = "MISCELLANEOUS"
    TRANSFERS = "TRANSFERS"
    GRANT_DECISION_NOTICES = "GRANT DECISION NOTICES"


class RegisterEntry(BaseModel):
    """One decision line of the daily register. Identity is (number, title)."""

    number: str = Field(..., description="Docket number with prefix", example="MC-12345")
    title: str = Field(..., description="Carrier name and location", example="ABC TRUCKING LLC - DALLAS, TX")
    decided: str = Field("N/A", description="Decision date (MM/DD/YYYY)", example="01/01/2026")
    category: RegisterCategory = Field(RegisterCategory.MISCELLANEOUS, description="Register section")

    class Config:
        use_enum_values = True


class RegisterResponse(BaseModel):
    success: bool = True
    count: int = 0
    last_updated: str = Field(..., alias="lastUpdated")
    entries: List[RegisterEntry] = Field(default_factory=list)

    class Config:
        populate_by_name = True
