"""Exception hierarchy for the Swiper API client.

Exception Hierarchy:
    SwiperClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── ValidationError (HTTP 422)
        ├── NotFoundError (HTTP 404)
        └── ServerError (HTTP 5xx)

Example:
    Catching specific errors::

        try:
            client.swiper.swipe("sideways")
        except ValidationError as e:
            print(f"Invalid request: {e.message}")

    Catching all client errors::

        try:
            client.swiper.undo()
        except SwiperClientError as e:
            print(f"Client error: {e}")
"""

from typing import Any


class SwiperClientError(Exception):
    """Base exception for all Swiper client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(SwiperClientError):
    """Failed to connect to the Swiper server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying transport exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(SwiperClientError):
    """Request timed out.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.timeout is not None:
            return f"{self.message} (timeout: {self.timeout}s)"
        return self.message


class APIError(SwiperClientError):
    """Server returned an error response.

    Attributes:
        status_code: HTTP status code from the server.
        error_type: Error type from the response body (if available).
        details: Additional error details (if available).
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class ValidationError(APIError):
    """Request validation failed (HTTP 422), e.g. an unknown swipe direction."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_type="validation_error",
            details=details,
            response_body=response_body,
        )


class NotFoundError(APIError):
    """Resource not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            error_type="not_found",
            details=details,
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    Raised, for instance, when the server's engine was never initialized.
    Retried automatically for 502/503/504 when retry is enabled.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type="server_error",
            details=details,
            response_body=response_body,
        )
