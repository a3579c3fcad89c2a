"""
Submission feed: the dashboard's current period and record list.

Each fetch is tagged with a ticket. Only the result for the most recently
issued ticket is applied, so a slow response for an old period can never
overwrite the data for the period the user picked last.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from ..api.client import APIError, FootprintAPIClient, Period, SubmissionRecord
from ..utils.logging import get_logger
from .analytics import AnalyticsSummary, MissingPolicy, summarize

logger = get_logger(__name__)


class ViewState(str, Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class FetchTicket:
    sequence: int
    period: Period


class SubmissionFeed:
    """
    Holds the selected period, the records fetched for it and a loading flag.

    The feed starts out loading: nothing has been fetched yet.
    """

    def __init__(self, period: Period = Period.MONTH):
        self.period = Period(period)
        self.records: List[SubmissionRecord] = []
        self.loading = True
        self._sequence = 0

    @property
    def state(self) -> ViewState:
        return ViewState.LOADING if self.loading else ViewState.READY

    @property
    def has_fetched(self) -> bool:
        return self._sequence > 0

    def select_period(self, period: Period) -> FetchTicket:
        """
        Record a new selection and issue the ticket for its fetch.

        Args:
            period: Newly selected period

        Returns:
            FetchTicket: Ticket to pass to `settle` or `fail`
        """
        self._sequence += 1
        self.period = Period(period)
        self.loading = True
        return FetchTicket(sequence=self._sequence, period=self.period)

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket.sequence == self._sequence

    def settle(self, ticket: FetchTicket, records: Sequence[SubmissionRecord]) -> bool:
        """
        Apply a successful fetch. Returns False if the ticket is stale.
        """
        if not self.is_current(ticket):
            logger.debug(f"Discarding stale result for {ticket.period.value} (ticket {ticket.sequence})")
            return False
        self.records = list(records)
        self.loading = False
        return True

    def fail(self, ticket: FetchTicket, error: Exception) -> bool:
        """
        Apply a failed fetch: previous records stay. Returns False if the ticket is stale.
        """
        if not self.is_current(ticket):
            logger.debug(f"Discarding stale failure for {ticket.period.value} (ticket {ticket.sequence})")
            return False
        logger.error(f"Error fetching submissions: {str(error)}")
        self.loading = False
        return True

    def refresh(self, client: FootprintAPIClient, period: Optional[Period] = None) -> FetchTicket:
        """
        Fetch `period` (default: the current one) and apply the result.

        Args:
            client: API client to fetch with
            period: Period to select before fetching

        Returns:
            FetchTicket: The ticket issued for this fetch
        """
        ticket = self.select_period(period if period is not None else self.period)
        try:
            records = client.get_submissions(ticket.period)
        except APIError as e:
            self.fail(ticket, e)
        else:
            self.settle(ticket, records)
        return ticket

    def summary(self, missing: MissingPolicy = MissingPolicy.ZERO) -> AnalyticsSummary:
        return summarize(self.records, missing)
