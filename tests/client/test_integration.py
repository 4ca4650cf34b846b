"""Integration tests for the Swiper API client library.

These tests run against the real FastAPI app using Starlette's TestClient
for sync tests and httpx's ASGITransport for async tests, covering the
client library end to end against the actual API implementation.

Note: These tests use pytest-asyncio for async test support and create
a fresh engine for each test to ensure isolation.
"""

import httpx
import pytest
from httpx import ASGITransport
from starlette.testclient import TestClient

from api.dependencies import initialize_swiper_engine, shutdown_swiper_engine
from client import AsyncSwiperAPIClient, SwiperAPIClient, ValidationError
from main import app
from models.config import SwiperConfig


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def setup_swiper_engine():
    """Initialize the shared engine before each test.

    Four items, boundary 100, history depth 3. The engine is released
    afterwards so tests stay isolated.
    """
    config = SwiperConfig(boundary=100, history_enabled=True, history_depth=3)
    engine = initialize_swiper_engine(items=["A", "B", "C", "D"], config=config)
    yield engine
    shutdown_swiper_engine()


@pytest.fixture
def sync_client():
    """Create a synchronous client connected to the test app.

    Wraps Starlette's TestClient in an httpx transport so requests reach
    the ASGI app without a server process.
    """
    test_client = TestClient(app, raise_server_exceptions=False)

    class SyncTestTransport(httpx.BaseTransport):
        def handle_request(self, request: httpx.Request) -> httpx.Response:
            response = test_client.request(
                method=request.method,
                url=str(request.url.path),
                params=dict(request.url.params) if request.url.params else None,
                content=request.content,
                headers=dict(request.headers),
            )
            return httpx.Response(
                status_code=response.status_code,
                headers=response.headers,
                content=response.content,
            )

    with SwiperAPIClient(base_url="http://test", transport=SyncTestTransport()) as client:
        yield client


@pytest.fixture
async def async_client():
    """Create an asynchronous client connected to the test app.

    Uses httpx's ASGITransport to call the FastAPI app directly.
    """
    transport = ASGITransport(app=app)
    async with AsyncSwiperAPIClient(base_url="http://test", transport=transport) as client:
        yield client


# =============================================================================
# Sync Client Tests
# =============================================================================


class TestSwiperIntegration:
    """End-to-end tests with the synchronous client."""

    def test_health(self, sync_client):
        """The health endpoint answers."""
        assert sync_client.health() == {"status": "healthy"}

    def test_initial_state(self, sync_client, setup_swiper_engine):
        """State mirrors the shared engine."""
        state = sync_client.swiper.state()
        assert state.swiper_id == setup_swiper_engine.swiper_id
        assert state.remaining == 4
        assert state.history_enabled is True

    def test_release_undo_redo(self, sync_client):
        """A swipe gesture can be undone and redone through the API."""
        result = sync_client.swiper.release(x=150, y=-20)
        assert result.applied is True
        assert result.direction == "right"
        assert result.item.content == "A"

        undo = sync_client.swiper.undo()
        assert undo.applied is True
        assert undo.can_redo is True
        assert [i.content for i in sync_client.swiper.items().items] == ["A", "B", "C"]

        redo = sync_client.swiper.redo()
        assert redo.leave.x == 2000.0
        assert sync_client.swiper.state().remaining == 3

    def test_depth_limits_undo(self, sync_client):
        """Only history_depth swipes can be undone."""
        for _ in range(4):
            sync_client.swiper.swipe("up")
        assert sync_client.swiper.state().disabled is True

        applied = [sync_client.swiper.undo().applied for _ in range(4)]

        assert applied == [True, True, True, False]
        assert sync_client.swiper.state().remaining == 3

    def test_reset(self, sync_client):
        """Reset restores every item."""
        sync_client.swiper.swipe("left")
        sync_client.swiper.swipe("left")

        result = sync_client.swiper.reset()

        assert result.remaining == 4
        assert result.can_undo is False

    def test_invalid_direction_raises_validation_error(self, sync_client):
        """An unknown direction surfaces as a client ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            sync_client.swiper.swipe("sideways")
        assert exc_info.value.status_code == 422

    def test_classify_does_not_swipe(self, sync_client):
        """Classification leaves the stack alone."""
        result = sync_client.swiper.classify(x=-80, y=10)
        assert result.direction == "left"
        assert sync_client.swiper.state().remaining == 4


# =============================================================================
# Async Client Tests
# =============================================================================


class TestAsyncSwiperIntegration:
    """End-to-end tests with the asynchronous client."""

    async def test_swipe_and_undo(self, async_client):
        """The async client drives the same engine."""
        result = await async_client.swiper.swipe("down")
        assert result.applied is True
        assert result.leave.y == 2000.0

        undo = await async_client.swiper.undo()
        assert undo.direction == "down"

        state = await async_client.swiper.state()
        assert state.remaining == 4
        assert state.can_redo is True

    async def test_drag(self, async_client):
        """Drag samples report their opacity."""
        result = await async_client.swiper.drag(x=0, y=-250)
        assert result.opacity == 1.0
