"""Main Swiper client classes.

This module provides the entry points for talking to the Swiper API:
- SwiperAPIClient: Synchronous client
- AsyncSwiperAPIClient: Asynchronous client

Both expose the swiper endpoints through the `swiper` sub-client.

Example:
    Synchronous usage::

        from client import SwiperAPIClient

        with SwiperAPIClient(base_url="http://localhost:8000") as client:
            client.swiper.swipe("right")
            print(client.swiper.state().remaining)

    Asynchronous usage::

        from client import AsyncSwiperAPIClient

        async with AsyncSwiperAPIClient() as client:
            await client.swiper.undo()
"""

from typing import Any

from client._http import AsyncHTTPClient, HTTPClient
from client._swiper import AsyncSwiperClient, SwiperClient


class SwiperAPIClient:
    """Synchronous client for the Swiper REST API.

    Attributes:
        base_url: The base URL of the Swiper server.
        timeout: Request timeout in seconds.

    Example:
        client = SwiperAPIClient()
        try:
            client.swiper.release(x=-200, y=10)
        finally:
            client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the Swiper server.
            timeout: Request timeout in seconds.
            retry_enabled: Retry on connection errors, timeouts and HTTP
                502/503/504 with exponential backoff.
            max_retries: Maximum number of retry attempts.
            transport: Custom httpx transport (e.g. for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._swiper: SwiperClient | None = None

    def __enter__(self) -> "SwiperAPIClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def swiper(self) -> SwiperClient:
        """Sub-client for /swiper/* endpoints."""
        if self._swiper is None:
            self._swiper = SwiperClient(self._http)
        return self._swiper

    def health(self) -> dict[str, Any]:
        """Check server health.

        Returns:
            The health payload, e.g. {"status": "healthy"}.
        """
        return self._http.get("/health")


class AsyncSwiperAPIClient:
    """Asynchronous client for the Swiper REST API.

    Takes the same arguments as SwiperAPIClient; transport must be an
    httpx async transport (e.g. httpx.ASGITransport).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._swiper: AsyncSwiperClient | None = None

    async def __aenter__(self) -> "AsyncSwiperAPIClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def swiper(self) -> AsyncSwiperClient:
        """Sub-client for /swiper/* endpoints."""
        if self._swiper is None:
            self._swiper = AsyncSwiperClient(self._http)
        return self._swiper

    async def health(self) -> dict[str, Any]:
        """Check server health."""
        return await self._http.get("/health")
