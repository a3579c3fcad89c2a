"""
Plotly figures for the analytics page.
"""
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
from loguru import logger

from .api.client import SubmissionRecord
from .services.analytics import CATEGORY_CONFIG

NO_DATA_TEXT = "No data available"


def empty_figure(title: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=NO_DATA_TEXT,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False
    )
    fig.update_layout(title=title, height=400)
    return fig


def create_emission_trend_chart(records: Sequence[SubmissionRecord]) -> go.Figure:
    """Line chart of total emission score over time.

    Args:
        records: Submissions in any order; undated ones are skipped

    Returns:
        Plotly figure
    """
    title = "Emissions Over Time"
    rows = [
        {"created_at": record.created_at, "total": record.total_emission_score}
        for record in records
        if record.created_at is not None
    ]
    if not rows:
        return empty_figure(title)

    df = pd.DataFrame(rows)
    df["created_at"] = pd.to_datetime(df["created_at"], utc=True)
    df = df.sort_values("created_at")
    logger.debug(f"Trend chart: {len(df)} points")

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["created_at"],
        y=df["total"],
        mode="lines+markers",
        name="Total CO₂ (kg)",
        line=dict(color="green")
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Date",
        yaxis_title="CO₂ (kg)",
        height=400
    )
    return fig


def create_category_breakdown_chart(latest: Optional[SubmissionRecord]) -> go.Figure:
    """Donut chart of the latest submission's per-category scores.

    Categories the submission lacks or scored zero are left out.
    """
    title = "Latest Breakdown"
    if latest is None:
        return empty_figure(title)

    labels: List[str] = []
    values: List[float] = []
    for key, label in CATEGORY_CONFIG:
        value = getattr(latest, key)
        if value:
            labels.append(label)
            values.append(value)

    if not values:
        return empty_figure(title)

    fig = go.Figure(go.Pie(labels=labels, values=values, hole=0.4, sort=False))
    fig.update_layout(title=title, height=400)
    return fig


def create_category_average_chart(category_data: List[Dict[str, Any]]) -> go.Figure:
    """Bar chart of average emissions per category, in display order."""
    title = "Category Performance"
    if not category_data:
        return empty_figure(title)

    fig = go.Figure(go.Bar(
        x=[row["category"] for row in category_data],
        y=[row["average"] for row in category_data],
        name="Average CO₂ (kg)",
        marker_color="seagreen"
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Category",
        yaxis_title="Average CO₂ (kg)",
        xaxis_tickangle=-30,
        height=450
    )
    return fig
