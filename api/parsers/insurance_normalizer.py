"""
Insurance Normalizer Module.

SearchCarriers insurance records come from many filing providers and do not
agree on field names or units. Each canonical field has an ordered tuple of
source keys; the first key holding a value wins.
"""

import logging
import math
from typing import Any, List, Mapping, Optional, Sequence

from models.insurance_policy import InsurancePolicy

logger = logging.getLogger(__name__)

CARRIER_KEYS = ("name_company", "insurance_company", "insurance_company_name", "company_name")
POLICY_NUMBER_KEYS = ("policy_no", "policy_number", "pol_num")
EFFECTIVE_DATE_KEYS = ("effective_date",)
COVERAGE_KEYS = ("max_cov_amount", "coverage_to", "coverage_amount")
TYPE_CODE_KEYS = ("ins_type_code",)
CLASS_CODE_KEYS = ("ins_class_code",)

INSURANCE_TYPES = {"1": "BI&PD", "2": "CARGO", "3": "BOND"}
INSURANCE_CLASSES = {"P": "PRIMARY", "E": "EXCESS"}

NOT_AVAILABLE = "N/A"

# Providers report small limits in thousands of dollars ("750" means $750,000).
THOUSANDS_THRESHOLD = 10000


def first_present(record: Mapping[str, Any], keys: Sequence[str], default: Any = None) -> Any:
    """Return the value of the first key in `keys` that holds a non-empty value.

    Empty strings, None, False and zero count as absent.
    """
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse a coverage value to a number.

    - 750 -> 750.0
    - "2000000" -> 2000000.0
    - "N/A", "$1,000", None, 10**400 -> None

    Returns:
        Float value or None when the value is not a plain finite number
    """
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return amount if math.isfinite(amount) else None


def format_dollars(amount: float) -> str:
    """Render an amount as "$1,234,567" (fractions kept up to 3 digits)."""
    if amount.is_integer():
        return f"${int(amount):,}"
    return "$" + f"{amount:,.3f}".rstrip("0").rstrip(".")


def normalize_coverage(value: Any) -> str:
    """
    Normalize a coverage amount to a dollar string.

    - 750 -> "$750,000"
    - 2000000 -> "$2,000,000"
    - "N/A" -> "N/A"
    """
    amount = parse_amount(value)
    if amount is None:
        return str(value)
    if 0 < amount < THOUSANDS_THRESHOLD:
        amount *= 1000
    return format_dollars(amount)


def normalize_type(code: Any) -> str:
    """Map an insurance type code: "1" -> "BI&PD", unknown codes pass through upper-cased."""
    code = str(code)
    return INSURANCE_TYPES.get(code, code).upper()


def normalize_class(code: Any) -> str:
    """Map an insurance class code: "p" -> "PRIMARY", unknown codes pass through upper-cased."""
    code = str(code).upper()
    return INSURANCE_CLASSES.get(code, code)


def normalize_policy(dot: str, record: Mapping[str, Any]) -> InsurancePolicy:
    """Build an InsurancePolicy from one raw insurance record.

    Args:
        dot: USDOT number the records were requested for
        record: One element of the provider's insurance array

    Returns:
        InsurancePolicy: Policy with "N/A"/"NOT SPECIFIED" for missing fields
    """
    effective = first_present(record, EFFECTIVE_DATE_KEYS)

    return InsurancePolicy(
        dot=str(dot),
        carrier=str(first_present(record, CARRIER_KEYS, "NOT SPECIFIED")).upper(),
        policy_number=str(first_present(record, POLICY_NUMBER_KEYS, NOT_AVAILABLE)).upper(),
        effective_date=str(effective).split(" ")[0] if effective else NOT_AVAILABLE,
        coverage_amount=normalize_coverage(first_present(record, COVERAGE_KEYS, NOT_AVAILABLE)),
        policy_type=normalize_type(first_present(record, TYPE_CODE_KEYS, NOT_AVAILABLE)),
        policy_class=normalize_class(first_present(record, CLASS_CODE_KEYS, NOT_AVAILABLE))
    )


def extract_records(payload: Any) -> List[Any]:
    """Return the insurance array from a payload shaped {"data": [...]} or [...]."""
    records = payload.get("data") if isinstance(payload, Mapping) else payload
    return records if isinstance(records, list) else []


def normalize_policies(dot: str, payload: Any) -> List[InsurancePolicy]:
    """Normalize every insurance record in a SearchCarriers payload.

    Records that are not objects, or that fail to normalize, are logged and
    skipped so one bad record does not drop the rest.

    Args:
        dot: USDOT number the payload was requested for
        payload: Decoded JSON response

    Returns:
        list: One InsurancePolicy per usable record, in payload order
    """
    policies = []
    for index, record in enumerate(extract_records(payload)):
        if not isinstance(record, Mapping):
            logger.warning(f"Skipping insurance record {index} for DOT {dot}: not an object")
            continue
        try:
            policies.append(normalize_policy(dot, record))
        except Exception as e:
            logger.warning(f"Skipping insurance record {index} for DOT {dot}: {e}", exc_info=True)
    return policies
