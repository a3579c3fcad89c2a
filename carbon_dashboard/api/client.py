"""
HTTP client for the carbon tracker API.

This module provides a client for the submissions and session endpoints,
including error handling and response validation.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests
from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..config import get_settings


class Period(str, Enum):
    """Time window accepted by `GET /api/submissions`."""
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class CamelModel(BaseModel):
    """Base model for camelCase API payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SubmissionRecord(CamelModel):
    """One scored carbon footprint assessment."""
    id: str
    transportation_score: float
    energy_score: float
    water_score: float
    diet_score: float
    food_waste_score: float
    shopping_score: float
    waste_score: float
    electronics_score: float
    travel_score: float
    appliance_score: float
    home_score: Optional[float] = None
    heating_score: Optional[float] = None
    digital_score: Optional[float] = None
    pets_score: Optional[float] = None
    garden_score: Optional[float] = None
    total_emission_score: float
    impact_category: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are UTC on the server side
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class SignedInUser(CamelModel):
    """Public view of the signed-in account."""
    id: str
    email: str
    name: Optional[str] = None
    onboarding_completed: bool = False


class SessionTokenResponse(CamelModel):
    """Response model for a successful sign-in."""
    token: str
    user: SignedInUser


class APIError(Exception):
    """Custom exception for API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def sort_newest_first(records: List[SubmissionRecord]) -> List[SubmissionRecord]:
    """
    Order records by `created_at` descending.

    Records without a timestamp go last; ties keep their received order.
    """
    dated = [record for record in records if record.created_at is not None]
    undated = [record for record in records if record.created_at is None]
    dated.sort(key=lambda record: record.created_at, reverse=True)
    return dated + undated


class FootprintAPIClient:
    """
    HTTP client for the carbon tracker API.

    Requests carry the session token as a bearer header when one is set.
    Failures are not retried; every failure surfaces as an APIError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        token: Optional[str] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for the carbon tracker API
            timeout: Request timeout in seconds
            token: Session token to send with each request
        """
        settings = get_settings()
        self.base_url = base_url or settings.api_base_url
        self.timeout = timeout or settings.api_timeout
        self.token = token if token is not None else settings.api_token

        # Ensure base URL ends with /
        if not self.base_url.endswith('/'):
            self.base_url += '/'

        logger.info(f"Initialized FootprintAPIClient with base_url: {self.base_url}")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            params: Query parameters
            json_data: JSON request body

        Returns:
            requests.Response: HTTP response with status 200

        Raises:
            APIError: On transport failure or any non-200 status
        """
        url = urljoin(self.base_url, endpoint)
        logger.debug(f"Making {method} request to {url}")

        try:
            response = requests.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request failed: {str(e)}") from e

        if response.status_code != 200:
            raise APIError(f"HTTP {response.status_code}: {response.text}", response.status_code)

        logger.debug(f"Request successful: {method} {url}")
        return response

    def get_submissions(self, period: Period = Period.MONTH) -> List[SubmissionRecord]:
        """
        Retrieve the signed-in user's submissions for a period.

        Args:
            period: Time window to fetch

        Returns:
            List[SubmissionRecord]: Records ordered newest first

        Raises:
            APIError: If the request fails or the body is malformed
        """
        period = Period(period)
        response = self._make_request("GET", "api/submissions", params={"period": period.value})

        try:
            data = response.json()
            items = data.get("submissions") or []
            records = [SubmissionRecord.model_validate(item) for item in items]
        except (ValueError, AttributeError, TypeError, ValidationError) as e:
            raise APIError(f"Failed to parse submissions response: {str(e)}") from e

        logger.info(f"Fetched {len(records)} submissions (period={period.value})")
        return sort_newest_first(records)

    def sign_in(self, email: str, password: str) -> SessionTokenResponse:
        """
        Exchange credentials for a session token and keep it for later requests.

        Args:
            email: Account email
            password: Account password

        Returns:
            SessionTokenResponse: Token and account details

        Raises:
            APIError: If the credentials are rejected or the request fails
        """
        response = self._make_request(
            "POST", "api/auth/signin", json_data={"email": email, "password": password}
        )

        try:
            session = SessionTokenResponse.model_validate(response.json())
        except ValueError as e:
            raise APIError(f"Failed to parse sign-in response: {str(e)}") from e

        self.token = session.token
        logger.info(f"Signed in as user {session.user.id}")
        return session

    def sign_out(self) -> None:
        """Forget the session token."""
        self.token = None

    def health_check(self) -> Dict[str, Any]:
        """
        Check API health status.

        Returns:
            Dict[str, Any]: Health status information

        Raises:
            APIError: If request fails
        """
        try:
            response = self._make_request("GET", "health")
            return response.json()
        except Exception as e:
            raise APIError(f"Health check failed: {str(e)}")
