"""
Summary statistics over a list of submissions.

Every function here is pure. Input lists are expected newest first, which
is the order `FootprintAPIClient.get_submissions` returns.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..api.client import SubmissionRecord

# (attribute, display label) in display order
CATEGORY_CONFIG = (
    ("transportation_score", "Transportation"),
    ("energy_score", "Energy"),
    ("water_score", "Water"),
    ("diet_score", "Diet"),
    ("food_waste_score", "Food Waste"),
    ("shopping_score", "Shopping"),
    ("waste_score", "Waste"),
    ("electronics_score", "Electronics"),
    ("travel_score", "Travel"),
    ("appliance_score", "Appliances"),
    ("home_score", "Home"),
    ("heating_score", "Heating"),
    ("digital_score", "Digital Devices"),
    ("pets_score", "Pets"),
    ("garden_score", "Garden"),
)


class MissingPolicy(str, Enum):
    """How category averages treat a score a record does not have."""
    ZERO = "zero"
    EXCLUDED = "excluded"


class BadgeVariant(str, Enum):
    NEUTRAL = "default"
    CAUTIONARY = "secondary"
    SEVERE = "destructive"


def to_fixed(value: float, digits: int = 1) -> str:
    """
    Format a number with a fixed number of decimals.

    Ties round away from zero on the exact binary value of `value`, so
    0.25 becomes "0.3" while 1.15 (stored as 1.1499...) becomes "1.1".
    """
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_half_up(value: float, digits: int = 1) -> float:
    return float(to_fixed(value, digits))


def submission_count(records: Sequence[SubmissionRecord]) -> int:
    return len(records)


def average_score(records: Sequence[SubmissionRecord]) -> float:
    """Mean total emission score, 0.0 for no records."""
    if not records:
        return 0.0
    return sum(record.total_emission_score for record in records) / len(records)


def score_trend(records: Sequence[SubmissionRecord]) -> float:
    """
    Latest total minus the previous total; negative means improvement.

    Returns 0.0 with fewer than two records.
    """
    if len(records) < 2:
        return 0.0
    return records[0].total_emission_score - records[1].total_emission_score


def category_averages(
    records: Sequence[SubmissionRecord],
    missing: MissingPolicy = MissingPolicy.ZERO,
) -> Dict[str, float]:
    """
    Average score per category, keyed by display label in display order.

    Args:
        records: Submissions to average over
        missing: ZERO counts an absent score as 0 and keeps the record in the
            denominator; EXCLUDED averages only the records that have the score

    Returns:
        Dict[str, float]: Empty when there are no records
    """
    if not records:
        return {}

    averages: Dict[str, float] = {}
    for key, label in CATEGORY_CONFIG:
        values = [getattr(record, key) for record in records]
        if missing is MissingPolicy.EXCLUDED:
            present = [value for value in values if value is not None]
            averages[label] = sum(present) / len(present) if present else 0.0
        else:
            averages[label] = sum(value or 0.0 for value in values) / len(records)
    return averages


def category_chart_data(averages: Dict[str, float]) -> List[Dict[str, object]]:
    """Bar chart rows `{"category", "average"}` with averages rounded to one decimal."""
    return [
        {"category": category, "average": round_half_up(average, 1)}
        for category, average in averages.items()
    ]


def impact_badge_variant(impact_category: Optional[str]) -> BadgeVariant:
    if impact_category == "Low":
        return BadgeVariant.NEUTRAL
    if impact_category == "Medium":
        return BadgeVariant.CAUTIONARY
    return BadgeVariant.SEVERE


@dataclass
class AnalyticsSummary:
    """Everything the analytics view shows for one record list."""
    submission_count: int = 0
    average_score: float = 0.0
    trend: float = 0.0
    latest: Optional[SubmissionRecord] = None
    category_averages: Dict[str, float] = field(default_factory=dict)
    category_data: List[Dict[str, object]] = field(default_factory=list)
    badge_variant: BadgeVariant = BadgeVariant.SEVERE

    @property
    def impact_category(self) -> Optional[str]:
        return self.latest.impact_category if self.latest else None


def summarize(
    records: Sequence[SubmissionRecord],
    missing: MissingPolicy = MissingPolicy.ZERO,
) -> AnalyticsSummary:
    """
    Compute all statistics for a newest-first list of submissions.

    Args:
        records: Submissions, newest first
        missing: Policy for absent category scores

    Returns:
        AnalyticsSummary: Zero-valued defaults for an empty list
    """
    latest = records[0] if records else None
    averages = category_averages(records, missing)
    return AnalyticsSummary(
        submission_count=submission_count(records),
        average_score=average_score(records),
        trend=score_trend(records),
        latest=latest,
        category_averages=averages,
        category_data=category_chart_data(averages),
        badge_variant=impact_badge_variant(latest.impact_category if latest else None),
    )
