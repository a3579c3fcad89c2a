"""Shared fixtures for the carbon dashboard tests."""

from datetime import datetime, timedelta, timezone

import pytest

from carbon_dashboard.api.client import SubmissionRecord

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

CORE_SCORES = {
    "transportation_score": 10.0,
    "energy_score": 8.0,
    "water_score": 1.0,
    "diet_score": 6.0,
    "food_waste_score": 2.0,
    "shopping_score": 3.0,
    "waste_score": 1.5,
    "electronics_score": 2.5,
    "travel_score": 4.0,
    "appliance_score": 1.0,
}


@pytest.fixture
def make_record():
    """Factory for SubmissionRecord with sensible defaults."""
    counter = {"n": 0}

    def _make_record(total=40.0, impact_category="Medium", days_ago=0, created_at="auto", **scores):
        counter["n"] += 1
        if created_at == "auto":
            created_at = BASE_TIME - timedelta(days=days_ago)
        return SubmissionRecord(
            id=f"sub-{counter['n']}",
            total_emission_score=total,
            impact_category=impact_category,
            created_at=created_at,
            **{**CORE_SCORES, **scores},
        )

    return _make_record


@pytest.fixture
def record_payload():
    """Wire-format (camelCase) submission dict."""

    def _record_payload(record_id="sub-1", total=40.0, created_at="2024-03-01T12:00:00Z", **overrides):
        payload = {
            "id": record_id,
            "transportationScore": 10.0,
            "energyScore": 8.0,
            "waterScore": 1.0,
            "dietScore": 6.0,
            "foodWasteScore": 2.0,
            "shoppingScore": 3.0,
            "wasteScore": 1.5,
            "electronicsScore": 2.5,
            "travelScore": 4.0,
            "applianceScore": 1.0,
            "totalEmissionScore": total,
            "impactCategory": "Medium",
        }
        if created_at is not None:
            payload["createdAt"] = created_at
        payload.update(overrides)
        return payload

    return _record_payload
