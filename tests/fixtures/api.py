"""Shared fixtures for API testing.

These fixtures provide a TestClient and a fresh SwiperEngine instance
for each test, ensuring test isolation.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from models.engine import SwiperEngine
from tests.fixtures.swiper import create_engine


@pytest.fixture
def test_client():
    """Provide a FastAPI TestClient for making API requests.

    The lifespan is not run, so no shared engine is created; tests that
    need one inject it through dependency overrides.

    Returns:
        A FastAPI TestClient instance.
    """
    return TestClient(app)


@pytest.fixture
def fresh_engine() -> SwiperEngine:
    """Provide a fresh SwiperEngine instance for each test.

    Five items (A..E), boundary 100, three visible, history depth 5.

    Returns:
        A newly created SwiperEngine.
    """
    return create_engine(contents=("A", "B", "C", "D", "E"))
