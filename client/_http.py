"""Internal HTTP handling for the Swiper client.

This module wraps httpx for the sub-clients:
- Response parsing and mapping of error statuses to client exceptions
- Retry with exponential backoff on transient failures
- Sync and async clients with injectable transports

This is an internal module. Import from `client` instead.
"""

import asyncio
import logging
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)


HttpMethod = Literal["GET", "POST"]

# Gateway statuses retried when retry_enabled is set
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract message, type and details from an error response.

    Understands FastAPI's {"detail": ...} bodies (string or validation
    error list) and the server's {"error", "detail", "type"} bodies.
    Falls back to the raw text.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if isinstance(body, dict):
        detail = body.get("detail")
        if isinstance(detail, list):
            messages = [
                f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
                for err in detail
            ]
            return "; ".join(messages), "validation_error", {"errors": detail}
        if isinstance(detail, str):
            errors = body.get("validation_errors")
            return detail, body.get("type"), ({"errors": errors} if errors else None)
        if "error" in body:
            return str(body["error"]), body.get("type"), None

    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Args:
        response: The HTTP response to check.

    Raises:
        ValidationError: For HTTP 422 responses.
        NotFoundError: For HTTP 404 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code
    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code == 422:
        raise ValidationError(message=message, details=details, response_body=response_body)
    if status_code == 404:
        raise NotFoundError(message=message, details=details, response_body=response_body)
    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            details=details,
            response_body=response_body,
        )
    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay (base * 2^attempt), capped at the maximum.

    Args:
        attempt: The retry attempt number (0-indexed).
        base: Base delay in seconds.

    Returns:
        Delay in seconds before the next attempt.
    """
    return min(base * (2 ** attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _decode(response: httpx.Response) -> Any:
    _raise_for_status(response)
    if response.content:
        return response.json()
    return None


class _RetryPolicy:
    """Shared retry bookkeeping for the sync and async clients."""

    def __init__(self, base_url: str, timeout: float, retry_enabled: bool, max_retries: int):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    def should_retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.retry_enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def translate(self, exc: httpx.TransportError, path: str) -> Exception:
        url = f"{self.base_url}{path}"
        if isinstance(exc, httpx.TimeoutException):
            return TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            )
        return ConnectionError(message=f"Failed to connect to {url}", url=url, cause=exc)

    def should_retry_error(self, attempt: int) -> bool:
        return self.retry_enabled and attempt < self.attempts - 1


class HTTPClient(_RetryPolicy):
    """Synchronous HTTP client wrapping httpx.Client.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request to the Swiper server and decode its JSON body.

        Args:
            method: The HTTP method.
            path: The URL path (appended to base_url).
            json: JSON body to send.

        Returns:
            The parsed JSON body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        for attempt in range(self.attempts):
            try:
                response = self._client.request(method, path, json=json)
            except httpx.TransportError as e:
                error = self.translate(e, path)
                if not self.should_retry_error(attempt):
                    raise error from e
                logger.debug(f"{method} {path} failed ({e}), retrying")
                time.sleep(_calculate_backoff(attempt))
                continue

            if self.should_retry_status(response, attempt):
                logger.debug(f"{method} {path} returned {response.status_code}, retrying")
                time.sleep(_calculate_backoff(attempt))
                continue

            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self.request("POST", path, json=json)


class AsyncHTTPClient(_RetryPolicy):
    """Asynchronous HTTP client wrapping httpx.AsyncClient.

    Same behaviour as HTTPClient, with awaitable methods.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request to the Swiper server and decode its JSON body (async).

        See HTTPClient.request for arguments and errors.
        """
        for attempt in range(self.attempts):
            try:
                response = await self._client.request(method, path, json=json)
            except httpx.TransportError as e:
                error = self.translate(e, path)
                if not self.should_retry_error(attempt):
                    raise error from e
                logger.debug(f"{method} {path} failed ({e}), retrying")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self.should_retry_status(response, attempt):
                logger.debug(f"{method} {path} returned {response.status_code}, retrying")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, json=json)
