from typing import Any, List

from pydantic import BaseModel, Field


class InsurancePolicy(BaseModel):
    """Insurance filing normalized from a SearchCarriers insurance record.

    Provider payloads disagree on field names and units; every field here is
    already resolved to a display string (see parsers.insurance_normalizer).
    """

    dot: str = Field(..., description="USDOT number the lookup was made for", example="3487141")
    carrier: str = Field("NOT SPECIFIED", description="Insurance company name, upper-cased", example="PROGRESSIVE COMMERCIAL")
    policy_number: str = Field("N/A", alias="policyNumber", description="Policy number, upper-cased", example="CA-1234567")
    effective_date: str = Field("N/A", alias="effectiveDate", description="Effective date without time component", example="2024-01-01")
    coverage_amount: str = Field("N/A", alias="coverageAmount", description="Coverage rendered as a dollar string", example="$750,000")
    policy_type: str = Field("N/A", alias="type", description="BI&PD, CARGO, BOND or the raw code", example="BI&PD")
    policy_class: str = Field("N/A", alias="class", description="PRIMARY, EXCESS or the raw code", example="PRIMARY")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "dot": "3487141",
                "carrier": "PROGRESSIVE COMMERCIAL",
                "policyNumber": "CA-1234567",
                "effectiveDate": "2024-01-01",
                "coverageAmount": "$750,000",
                "type": "BI&PD",
                "class": "PRIMARY"
            }
        }


class InsuranceLookup(BaseModel):
    """Normalized policies together with the untouched upstream payload."""

    policies: List[InsurancePolicy] = Field(default_factory=list)
    raw: Any = None
