"""Swiper API Client Library.

A typed Python client for the Swiper REST API, usable synchronously or
asynchronously.

Example:
    from client import SwiperAPIClient

    with SwiperAPIClient(base_url="http://localhost:8000") as client:
        result = client.swiper.release(x=180, y=12)
        if result.applied:
            print(f"Swiped {result.item.key} {result.direction}")

Exports:
    SwiperAPIClient: Synchronous client.
    AsyncSwiperAPIClient: Asynchronous client.

    Exceptions:
        SwiperClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Resource not found (HTTP 404).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._swiper import (
    AsyncSwiperClient,
    ClassifyResponse,
    CommandResponse,
    DragResponse,
    Item,
    LeaveTarget,
    SwiperClient,
    SwiperStateResponse,
    VisibleItem,
    VisibleItemsResponse,
)
from client.client import AsyncSwiperAPIClient, SwiperAPIClient
from client.exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    ServerError,
    SwiperClientError,
    TimeoutError,
    ValidationError,
)

__all__ = [
    "SwiperAPIClient",
    "AsyncSwiperAPIClient",
    "SwiperClient",
    "AsyncSwiperClient",
    "ClassifyResponse",
    "CommandResponse",
    "DragResponse",
    "Item",
    "LeaveTarget",
    "SwiperStateResponse",
    "VisibleItem",
    "VisibleItemsResponse",
    "SwiperClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ServerError",
]
