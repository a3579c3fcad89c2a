"""
Unit tests for the FootprintAPIClient.

Tests the API client functionality including error handling,
ordering and response parsing.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from carbon_dashboard.api.client import APIError, FootprintAPIClient, Period


def json_response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


class TestFootprintAPIClient:
    """Test cases for FootprintAPIClient."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = FootprintAPIClient(
            base_url="http://test-api.com",
            timeout=10,
            token="session-token"
        )

    def test_init_default_settings(self):
        """Test client initialization with default settings."""
        with patch('carbon_dashboard.api.client.get_settings') as mock_settings:
            mock_settings.return_value.api_base_url = "http://default.com"
            mock_settings.return_value.api_timeout = 30
            mock_settings.return_value.api_token = None

            client = FootprintAPIClient()
            assert client.base_url == "http://default.com/"
            assert client.timeout == 30
            assert not client.is_authenticated

    def test_init_custom_settings(self):
        """Test client initialization with custom settings."""
        client = FootprintAPIClient(base_url="http://custom.com/", timeout=60, token="abc")
        assert client.base_url == "http://custom.com/"
        assert client.timeout == 60
        assert client.is_authenticated

    @patch('carbon_dashboard.api.client.requests.request')
    def test_make_request_success(self, mock_request):
        """Test successful API request sends the bearer token and timeout."""
        mock_response = json_response({"test": "data"})
        mock_request.return_value = mock_response

        response = self.client._make_request("GET", "test-endpoint")

        assert response == mock_response
        mock_request.assert_called_once()
        kwargs = mock_request.call_args.kwargs
        assert kwargs["url"] == "http://test-api.com/test-endpoint"
        assert kwargs["headers"]["Authorization"] == "Bearer session-token"
        assert kwargs["timeout"] == 10

    @patch('carbon_dashboard.api.client.requests.request')
    def test_make_request_does_not_retry(self, mock_request):
        """Test transport failures surface immediately as APIError."""
        mock_request.side_effect = requests.exceptions.ConnectionError("Connection error")

        with pytest.raises(APIError, match="Connection error"):
            self.client._make_request("GET", "test-endpoint")

        assert mock_request.call_count == 1

    @patch('carbon_dashboard.api.client.requests.request')
    def test_make_request_api_error(self, mock_request):
        """Test API error handling."""
        mock_response = Mock()
        mock_response.status_code = 500
        mock_response.text = "Internal Server Error"
        mock_request.return_value = mock_response

        with pytest.raises(APIError) as exc_info:
            self.client._make_request("GET", "test-endpoint")

        assert "HTTP 500" in str(exc_info.value)
        assert exc_info.value.status_code == 500

    @patch('carbon_dashboard.api.client.requests.request')
    def test_no_authorization_header_without_token(self, mock_request):
        mock_request.return_value = json_response({})
        client = FootprintAPIClient(base_url="http://test-api.com", timeout=10, token="")

        client._make_request("GET", "health")

        assert "Authorization" not in mock_request.call_args.kwargs["headers"]

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_success(self, mock_request, record_payload):
        """Test successful submissions retrieval."""
        mock_request.return_value = json_response(
            {"submissions": [record_payload(homeScore=2.5)]}
        )

        records = self.client.get_submissions(Period.WEEK)

        assert len(records) == 1
        assert records[0].total_emission_score == 40.0
        assert records[0].food_waste_score == 2.0
        assert records[0].home_score == 2.5
        assert records[0].garden_score is None
        assert records[0].created_at.year == 2024
        assert mock_request.call_args.kwargs["params"] == {"period": "week"}
        assert mock_request.call_args.kwargs["url"] == "http://test-api.com/api/submissions"

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_accepts_plain_string_period(self, mock_request):
        mock_request.return_value = json_response({"submissions": []})

        self.client.get_submissions("all")

        assert mock_request.call_args.kwargs["params"] == {"period": "all"}

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_sorts_newest_first(self, mock_request, record_payload):
        mock_request.return_value = json_response({"submissions": [
            record_payload("old", created_at="2024-01-01T00:00:00Z"),
            record_payload("undated", created_at=None),
            record_payload("new", created_at="2024-03-01T00:00:00Z"),
            record_payload("mid", created_at="2024-02-01T00:00:00"),
        ]})

        records = self.client.get_submissions(Period.ALL)

        assert [r.id for r in records] == ["new", "mid", "old", "undated"]

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_missing_key_is_empty(self, mock_request):
        mock_request.return_value = json_response({})

        assert self.client.get_submissions(Period.MONTH) == []

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_unauthorized(self, mock_request):
        mock_request.return_value = json_response({"detail": "Not authenticated"}, status_code=401)

        with pytest.raises(APIError) as exc_info:
            self.client.get_submissions(Period.MONTH)

        assert exc_info.value.status_code == 401

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_non_json_body(self, mock_request):
        mock_response = json_response(None)
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_request.return_value = mock_response

        with pytest.raises(APIError, match="Failed to parse"):
            self.client.get_submissions(Period.MONTH)

    @patch('carbon_dashboard.api.client.requests.request')
    def test_get_submissions_wrong_shape(self, mock_request):
        mock_request.return_value = json_response({"submissions": [{"id": "broken"}]})

        with pytest.raises(APIError, match="Failed to parse"):
            self.client.get_submissions(Period.MONTH)

    @patch('carbon_dashboard.api.client.requests.request')
    def test_sign_in_stores_token(self, mock_request):
        client = FootprintAPIClient(base_url="http://test-api.com", timeout=10, token="")
        mock_request.return_value = json_response({
            "token": "fresh-token",
            "user": {"id": "u-1", "email": "ada@example.com", "name": "Ada", "onboardingCompleted": True},
        })

        session = client.sign_in("ada@example.com", "correct-horse-battery")

        assert session.user.onboarding_completed is True
        assert client.token == "fresh-token"
        assert mock_request.call_args.kwargs["json"] == {
            "email": "ada@example.com",
            "password": "correct-horse-battery",
        }

    @patch('carbon_dashboard.api.client.requests.request')
    def test_sign_in_rejected(self, mock_request):
        mock_request.return_value = json_response({"detail": "Invalid email or password"}, status_code=401)

        with pytest.raises(APIError) as exc_info:
            self.client.sign_in("ada@example.com", "wrong")

        assert exc_info.value.status_code == 401
        assert self.client.token == "session-token"

    def test_sign_out_forgets_token(self):
        self.client.sign_out()
        assert not self.client.is_authenticated

    @patch('carbon_dashboard.api.client.requests.request')
    def test_health_check_success(self, mock_request):
        """Test successful health check."""
        mock_request.return_value = json_response({"status": "healthy"})

        assert self.client.health_check() == {"status": "healthy"}

    @patch('carbon_dashboard.api.client.requests.request')
    def test_health_check_failure(self, mock_request):
        """Test health check failure."""
        mock_request.side_effect = requests.exceptions.Timeout("timed out")

        with pytest.raises(APIError, match="Health check failed"):
            self.client.health_check()
