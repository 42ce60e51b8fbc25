import json
from datetime import datetime, timezone
from typing import Dict, List, Optional

from database import BaseRepository
from models.carrier_profile import CarrierProfile
from models.insurance_policy import InsurancePolicy
from models.safety_profile import SafetyProfile

# Nested values Neo4j cannot hold as properties; stored as JSON strings.
JSON_FIELDS = ("basic_scores", "oos_rates", "insurance_policies")


def _safety_fields(safety: SafetyProfile) -> Dict:
    return {
        "safety_rating": safety.rating,
        "safety_rating_date": safety.rating_date,
        "basic_scores": [score.model_dump(by_alias=True) for score in safety.basic_scores],
        "oos_rates": [rate.model_dump(by_alias=True) for rate in safety.oos_rates],
    }


def _insurance_fields(policies: List[InsurancePolicy]) -> Dict:
    return {"insurance_policies": [policy.model_dump(by_alias=True) for policy in policies]}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CarrierRepository(BaseRepository):
    """Repository for scraped carrier profiles in Neo4j.

    Carriers are keyed by MC number; safety and insurance data are attached
    later by DOT number.
    """

    def get(self, mc_number: str) -> Optional[Dict]:
        """Get a stored carrier by MC number"""
        query = """
        MATCH (c:Carrier {mc_number: $mc_number})
        RETURN c
        """
        result = self.execute_query(query, {"mc_number": mc_number})
        if not result:
            return None

        record = dict(result[0]["c"])
        for field in JSON_FIELDS:
            if isinstance(record.get(field), str):
                record[field] = json.loads(record[field])
        return record

    def upsert(self, profile: CarrierProfile) -> Dict:
        """Create or update a carrier node, merging on MC number.

        Args:
            profile: Scraped carrier profile

        Returns:
            dict: Stored node properties
        """
        query = """
        MERGE (c:Carrier {mc_number: $mc_number})
        ON CREATE SET c.created_at = $now
        SET c += $properties, c.updated_at = $now
        RETURN c
        """
        params = {
            "mc_number": profile.mc_number,
            "properties": profile.model_dump(),
            "now": _now()
        }
        result = self.execute_query(query, params)
        return result[0]["c"] if result else None

    def _update_by_dot(self, dot_number: str, fields: Dict) -> int:
        query = """
        MATCH (c:Carrier {dot_number: $dot_number})
        SET c += $properties, c.updated_at = $now
        RETURN count(c) as updated
        """
        properties = {
            key: json.dumps(value) if key in JSON_FIELDS else value
            for key, value in fields.items()
        }
        result = self.execute_query(query, {
            "dot_number": dot_number,
            "properties": properties,
            "now": _now()
        })
        return result[0]["updated"] if result else 0

    def update_safety(self, dot_number: str, safety: SafetyProfile) -> int:
        """Attach a safety profile to carriers with the DOT number.

        Returns:
            int: Number of carriers updated
        """
        return self._update_by_dot(dot_number, _safety_fields(safety))

    def update_insurance(self, dot_number: str, policies: List[InsurancePolicy]) -> int:
        """Replace the insurance policies of carriers with the DOT number.

        Returns:
            int: Number of carriers updated
        """
        return self._update_by_dot(dot_number, _insurance_fields(policies))


class InMemoryCarrierRepository:
    """Dictionary-backed carrier repository with the same interface as CarrierRepository.

    Used for local runs without Neo4j and in tests.
    """

    def __init__(self):
        self._carriers: Dict[str, Dict] = {}

    def get(self, mc_number: str) -> Optional[Dict]:
        record = self._carriers.get(mc_number)
        return dict(record) if record else None

    def upsert(self, profile: CarrierProfile) -> Dict:
        now = _now()
        record = self._carriers.setdefault(profile.mc_number, {"created_at": now})
        record.update(profile.model_dump())
        record["updated_at"] = now
        return dict(record)

    def _update_by_dot(self, dot_number: str, fields: Dict) -> int:
        updated = 0
        for record in self._carriers.values():
            if record.get("dot_number") == dot_number:
                record.update(fields)
                record["updated_at"] = _now()
                updated += 1
        return updated

    def update_safety(self, dot_number: str, safety: SafetyProfile) -> int:
        return self._update_by_dot(dot_number, _safety_fields(safety))

    def update_insurance(self, dot_number: str, policies: List[InsurancePolicy]) -> int:
        return self._update_by_dot(dot_number, _insurance_fields(policies))
