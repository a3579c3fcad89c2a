"""Carbon tracker API client."""

from .client import APIError, FootprintAPIClient, Period, SubmissionRecord

__all__ = ["APIError", "FootprintAPIClient", "Period", "SubmissionRecord"]
