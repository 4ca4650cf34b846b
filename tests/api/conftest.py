"""Shared fixtures for API integration tests.

This module provides common fixtures used across all API test files,
including TestClient setup and SwiperEngine dependency injection.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_swiper_engine
from main import app


@pytest.fixture
def client_with_engine(fresh_engine):
    """Provide a TestClient with a fresh SwiperEngine injected.

    Uses FastAPI's dependency override system to inject the test engine
    instead of the global one.

    Args:
        fresh_engine: A pytest fixture providing a fresh SwiperEngine.

    Yields:
        A tuple of (TestClient, SwiperEngine) for testing.

    Example:
        def test_something(client_with_engine):
            client, engine = client_with_engine
            response = client.get("/swiper/state")
            assert response.status_code == 200
    """
    # Override the dependency to return our test engine
    app.dependency_overrides[get_swiper_engine] = lambda: fresh_engine

    client = TestClient(app)

    yield client, fresh_engine

    app.dependency_overrides.clear()
