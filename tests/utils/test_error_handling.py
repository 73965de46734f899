"""Tests for error handling utilities."""

import logging

import httpx

from nuget_promote.exceptions import FeedError
from nuget_promote.utils.error_handling import (
    handle_generic_error,
    handle_http_error,
)


def status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://feed.example.com/v3/index.json")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"{status_code} error", request=request, response=response)


class TestHandleHttpError:
    """Tests for handle_http_error function."""

    def test_handle_403_error(self, caplog):
        """Test handling 403 Forbidden error."""
        handle_http_error(status_error(403), "push package", log_traceback=False)

        assert "Access denied during push package" in caplog.text
        assert "API key" in caplog.text

    def test_handle_401_error(self, caplog):
        """Test handling 401 Unauthorized error."""
        handle_http_error(status_error(401), "push package", log_traceback=False)

        assert "Authentication failed" in caplog.text
        assert "invalid credentials" in caplog.text

    def test_handle_404_from_message(self, caplog):
        """Test that the status is taken from the message when there is no response."""
        handle_http_error(httpx.HTTPError("404 Not Found"), "read service index", log_traceback=False)

        assert "Resource not found" in caplog.text

    def test_handle_500_error(self, caplog):
        """Test handling 500 Server Error."""
        handle_http_error(status_error(503), "list versions", log_traceback=False)

        assert "Feed server error" in caplog.text

    def test_handle_timeout(self, caplog):
        """Test handling a timeout."""
        handle_http_error(httpx.ReadTimeout("timed out"), "download package", log_traceback=False)

        assert "Timed out during download package" in caplog.text

    def test_handle_generic_http_error(self, caplog):
        """Test handling generic HTTP error."""
        handle_http_error(status_error(400), "push package", log_traceback=False)

        assert "HTTP error during push package" in caplog.text

    def test_traceback_at_debug(self, caplog):
        """Test that the traceback is logged at DEBUG level."""
        with caplog.at_level(logging.DEBUG):
            handle_http_error(status_error(400), "push package")

        assert "Traceback:" in caplog.text


class TestHandleGenericError:
    """Tests for handle_generic_error function."""

    def test_promote_error_without_traceback(self, caplog):
        """Test that expected failures are logged in one line."""
        handle_generic_error(FeedError("feed unavailable"), "promotion")

        assert "Promotion failed: feed unavailable" in caplog.text
        assert "Traceback" not in caplog.text

    def test_unexpected_error(self, caplog):
        """Test that unexpected errors are logged with a traceback."""
        handle_generic_error(RuntimeError("boom"), "promotion")

        assert "Unexpected error during promotion: boom" in caplog.text
        assert "Traceback:" in caplog.text
