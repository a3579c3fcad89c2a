"""
View models for the analytics page.

Builds the four stat cards and the period options from an AnalyticsSummary,
independently of Streamlit so the formatting can be tested directly.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .api.client import Period
from .services.analytics import AnalyticsSummary, BadgeVariant, to_fixed

PERIOD_OPTIONS: Tuple[Tuple[Period, str], ...] = (
    (Period.WEEK, "Last Week"),
    (Period.MONTH, "Last Month"),
    (Period.ALL, "All Time"),
)

ICON_TARGET = "target"
ICON_CALENDAR = "calendar"
ICON_TRENDING_UP = "trending-up"
ICON_TRENDING_DOWN = "trending-down"

TREND_GREEN = "green"
TREND_RED = "red"


@dataclass(frozen=True)
class StatCard:
    title: str
    value: str
    icon: str
    description: Optional[str] = None
    trend_color: Optional[str] = None
    badge_variant: Optional[BadgeVariant] = None


def period_label(period: Period) -> str:
    return dict(PERIOD_OPTIONS)[Period(period)]


def trend_icon(trend: float) -> str:
    return ICON_TRENDING_DOWN if trend < 0 else ICON_TRENDING_UP


def trend_color(trend: float) -> str:
    return TREND_GREEN if trend < 0 else TREND_RED


def trend_description(trend: float) -> Optional[str]:
    """E.g. "↓ 1.2 from last"; None when there is no change."""
    if trend == 0:
        return None
    arrow = "↓" if trend < 0 else "↑"
    return f"{arrow} {to_fixed(abs(trend), 1)} from last"


def build_stat_cards(summary: AnalyticsSummary) -> List[StatCard]:
    """
    Build the Average Score, Latest Score, Submissions and Impact Level cards.

    Args:
        summary: Statistics for the current record list

    Returns:
        List[StatCard]: Exactly four cards, in display order
    """
    latest = summary.latest
    latest_value = f"{to_fixed(latest.total_emission_score, 1)} kg" if latest else "0 kg"

    return [
        StatCard(
            title="Average Score",
            value=f"{to_fixed(summary.average_score, 1)} kg",
            description="CO₂ equivalent",
            icon=ICON_TARGET,
        ),
        StatCard(
            title="Latest Score",
            value=latest_value,
            description=trend_description(summary.trend),
            trend_color=trend_color(summary.trend),
            icon=trend_icon(summary.trend),
        ),
        StatCard(
            title="Submissions",
            value=str(summary.submission_count),
            description="Tracking sessions",
            icon=ICON_CALENDAR,
        ),
        StatCard(
            title="Impact Level",
            value=summary.impact_category or "Unknown",
            description="Current category",
            badge_variant=summary.badge_variant,
            icon=ICON_TARGET,
        ),
    ]
