"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    TaskerError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
)


class TestTaskerError:
    def test_message(self):
        """TaskerError should store message."""
        error = TaskerError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """TaskerError should default code to class name."""
        error = TaskerError("Test error")
        assert error.code == "TaskerError"

    def test_custom_code(self):
        error = TaskerError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_default_details(self):
        error = TaskerError("Test error")
        assert error.details == {}

    def test_to_dict(self):
        """to_dict should produce the failure envelope."""
        error = TaskerError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result == {
            "success": False,
            "message": "Test error",
            "error": "TEST_ERROR",
            "details": {"key": "value"},
        }

    def test_to_dict_omits_empty_details(self):
        result = TaskerError("Test error").to_dict()

        assert result["success"] is False
        assert result["error"] == "TaskerError"
        assert "details" not in result


class TestSubclasses:
    @pytest.mark.parametrize(
        "error_class",
        [NotFoundError, ValidationError, AuthenticationError, ConflictError],
    )
    def test_inherits_from_tasker_error(self, error_class):
        error = error_class("boom")
        assert isinstance(error, TaskerError)
        assert error.code == error_class.__name__

    def test_external_service_error_records_service(self):
        """ExternalServiceError should include the service in details."""
        error = ExternalServiceError("Provider down", service="google", code="PROVIDER_ERROR")

        assert error.service == "google"
        assert error.details["service"] == "google"
        assert error.to_dict()["error"] == "PROVIDER_ERROR"

    def test_external_service_error_keeps_details(self):
        error = ExternalServiceError("x", service="google", details={"reason": "timeout"})
        assert error.details == {"reason": "timeout", "service": "google"}
