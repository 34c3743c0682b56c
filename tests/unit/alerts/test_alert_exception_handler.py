"""Unit tests for the alerting exception handler."""

import unittest
from unittest.mock import Mock, patch

from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.views import APIView

from alerts.exceptions import (
    AlertNotFoundError,
    AlertStoreError,
    InvalidSnoozeDurationError,
    RecipientNotFoundError,
)
from alerts.exceptions.handlers import custom_exception_handler


class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom exception handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/alerting/alerts/a-1"
        self.mock_request.method = "GET"

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

    @patch("alerts.exceptions.handlers.get_request_id")
    def test_alert_not_found_maps_to_404(self, mock_get_request_id):
        """Test AlertNotFoundError becomes a 404 body."""
        mock_get_request_id.return_value = "req-1"

        response = custom_exception_handler(AlertNotFoundError("a-1"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["status"], 404)
        self.assertEqual(response.data["message"], "Alert with ID a-1 not found")
        self.assertEqual(response.data["request_id"], "req-1")
        self.assertIn("timestamp", response.data)
        self.assertEqual(response["X-Request-ID"], "req-1")

    @patch("alerts.exceptions.handlers.get_request_id", return_value=None)
    def test_domain_errors_keep_their_status(self, _mock_get_request_id):
        """Test each alerting error maps to its status code."""
        cases = [
            (RecipientNotFoundError("u-1"), 404),
            (InvalidSnoozeDurationError(0, 168), 400),
            (AlertStoreError("get_alert", "locked"), 503),
        ]
        for exc, expected in cases:
            with self.subTest(exc=type(exc).__name__):
                response = custom_exception_handler(exc, self.context)
                self.assertEqual(response.status_code, expected)
                self.assertEqual(response.data["message"], str(exc))
                self.assertNotIn("X-Request-ID", response)

    @patch("alerts.exceptions.handlers.get_request_id", return_value="req-2")
    def test_drf_exceptions_keep_drf_body(self, _mock_get_request_id):
        """Test DRF exceptions are rendered by DRF."""
        response = custom_exception_handler(ValidationError("bad"), self.context)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response["X-Request-ID"], "req-2")

    @patch("alerts.exceptions.handlers.get_request_id", return_value="req-3")
    def test_http404(self, _mock_get_request_id):
        """Test Django Http404 becomes 404."""
        response = custom_exception_handler(Http404("nope"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    @patch("alerts.exceptions.handlers.logger")
    @patch("alerts.exceptions.handlers.get_request_id", return_value="req-4")
    def test_unexpected_error_is_500(self, _mock_get_request_id, mock_logger):
        """Test unknown exceptions hide details and log an error."""
        response = custom_exception_handler(RuntimeError("secret"), self.context)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], "An internal server error occurred.")
        mock_logger.error.assert_called_once()
        mock_logger.warning.assert_not_called()

    @patch("alerts.exceptions.handlers.logger")
    @patch("alerts.exceptions.handlers.get_request_id", return_value=None)
    def test_client_errors_log_warning(self, _mock_get_request_id, mock_logger):
        """Test 4xx responses are logged as warnings."""
        custom_exception_handler(AlertNotFoundError("a-1"), {"view": None})

        mock_logger.warning.assert_called_once()
        self.assertIn("unknown", mock_logger.warning.call_args[0][0])
