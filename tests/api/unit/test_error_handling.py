"""Unit tests for API error handling.

Tests for the exception handlers in api/exceptions.py. These tests verify
that errors are properly converted to consistent JSON responses.
"""

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from fastapi import status
from pydantic import BaseModel, ValidationError

from api.exceptions import (
    generic_exception_handler,
    invalid_configuration_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from models.exceptions import InvalidConfigurationError


# Helper to run async functions synchronously
def run_async(coro):
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


def body_of(response) -> dict:
    """Decode a JSONResponse body."""
    return json.loads(response.body)


@pytest.fixture
def mock_request():
    """Provide a request stand-in with a URL path."""
    request = MagicMock()
    request.url.path = "/swiper/test"
    return request


# =============================================================================
# Exception Handler Tests
# =============================================================================


class TestInvalidConfigurationHandler:
    """Tests for invalid_configuration_handler."""

    def test_returns_400_with_field(self, mock_request):
        """Handler returns 400 naming the offending field."""
        exc = InvalidConfigurationError("boundary", "boundary must be positive")

        response = run_async(invalid_configuration_handler(mock_request, exc))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = body_of(response)
        assert body["field"] == "boundary"
        assert body["type"] == "InvalidConfigurationError"
        assert "boundary must be positive" in body["detail"]


class TestValidationExceptionHandler:
    """Tests for validation_exception_handler."""

    def test_returns_422_with_errors(self, mock_request):
        """Handler returns 422 and lists the validation errors."""

        class Sample(BaseModel):
            count: int

        with pytest.raises(ValidationError) as exc_info:
            Sample(count="many")

        response = run_async(validation_exception_handler(mock_request, exc_info.value))

        assert response.status_code == 422
        body = body_of(response)
        assert body["error"] == "Validation Error"
        assert body["validation_errors"][0]["loc"] == ["count"]


class TestValueErrorHandler:
    """Tests for value_error_handler."""

    def test_returns_400(self, mock_request):
        """Handler returns 400 with the error message."""
        response = run_async(value_error_handler(mock_request, ValueError("'tap' is not a valid EventKind")))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert body_of(response)["detail"] == "'tap' is not a valid EventKind"


class TestRuntimeErrorHandler:
    """Tests for runtime_error_handler."""

    def test_returns_500(self, mock_request):
        """Handler returns 500 with the error message."""
        exc = RuntimeError("SwiperEngine not initialized")

        response = run_async(runtime_error_handler(mock_request, exc))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert body_of(response)["type"] == "RuntimeError"


class TestGenericExceptionHandler:
    """Tests for generic_exception_handler."""

    def test_hides_details(self, mock_request, caplog):
        """Handler returns a generic message and logs the real one."""
        response = run_async(generic_exception_handler(mock_request, KeyError("secret")))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = body_of(response)
        assert body["detail"] == "An unexpected error occurred"
        assert body["type"] == "KeyError"
        assert "secret" in caplog.text
