from typing import List

from pydantic import BaseModel, Field, field_validator


class CarrierProfile(BaseModel):
    """Carrier profile assembled from the SAFER company snapshot.

    Every scalar field is a string; a label that is not found on the page
    yields an empty string rather than None. The MC number is the identity
    key used when the profile is upserted into storage.
    """

    # Primary Identifier
    mc_number: str = Field(..., alias="mcNumber", description="MC/MX docket number used for the lookup", example="123456")
    dot_number: str = Field("", alias="dotNumber", description="USDOT number", example="3487141")

    # Identity
    legal_name: str = Field("", alias="legalName", description="Legal name of the carrier", example="ABC TRUCKING LLC")
    dba_name: str = Field("", alias="dbaName", description="Doing-business-as name")
    entity_type: str = Field("", alias="entityType", description="Entity type", example="CARRIER")
    status: str = Field("", description="Operating authority status", example="AUTHORIZED FOR Property")

    # Contact
    phone: str = Field("", description="Phone number", example="(214) 555-0100")
    email: str = Field("", description="Email from the SMS registration page")
    physical_address: str = Field("", alias="physicalAddress", example="123 MAIN ST, DALLAS, TX 75201")
    mailing_address: str = Field("", alias="mailingAddress")

    # Fleet
    power_units: str = Field("", alias="powerUnits", example="25")
    drivers: str = Field("", example="30")
    non_cmv_units: str = Field("", alias="nonCmvUnits")

    # Filings
    date_scraped: str = Field("", alias="dateScraped", description="Scrape date (M/D/YYYY)", example="10/19/2026")
    mcs150_date: str = Field("", alias="mcs150Date", description="Date of last MCS-150 filing")
    mcs150_mileage: str = Field("", alias="mcs150Mileage", description="MCS-150 mileage and year")
    out_of_service_date: str = Field("", alias="outOfServiceDate")
    state_carrier_id: str = Field("", alias="stateCarrierId")
    duns_number: str = Field("", alias="dunsNumber")

    # Marked checkbox groups (set semantics)
    operation_classification: List[str] = Field(default_factory=list, alias="operationClassification")
    carrier_operation: List[str] = Field(default_factory=list, alias="carrierOperation")
    cargo_carried: List[str] = Field(default_factory=list, alias="cargoCarried")

    @field_validator("operation_classification", "carrier_operation", "cargo_carried")
    @classmethod
    def unique_items(cls, v: List[str]) -> List[str]:
        """Drop repeated labels, keeping the first appearance."""
        return list(dict.fromkeys(v))

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "mcNumber": "123456",
                "dotNumber": "3487141",
                "legalName": "ABC TRUCKING LLC",
                "entityType": "CARRIER",
                "status": "AUTHORIZED FOR Property",
                "physicalAddress": "123 MAIN ST, DALLAS, TX 75201",
                "dateScraped": "10/19/2026",
                "operationClassification": ["Auth. For Hire"],
                "carrierOperation": ["Interstate"],
                "cargoCarried": ["General Freight"],
                "email": ""
            }
        }
