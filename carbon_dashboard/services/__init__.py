"""Analytics and data services for the carbon dashboard."""

from .analytics import AnalyticsSummary, MissingPolicy, summarize
from .feed import FetchTicket, SubmissionFeed, ViewState

__all__ = ["AnalyticsSummary", "MissingPolicy", "summarize", "FetchTicket", "SubmissionFeed", "ViewState"]
