"""Swiper sub-client for the Swiper API.

This module provides SwiperClient and AsyncSwiperClient for the /swiper/*
endpoints.

This is an internal module. Import from `client` instead.
"""

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient


Direction = Literal["left", "right", "up", "down"]


# Response models for swiper endpoints


class Item(BaseModel):
    """A stack item as returned by the server.

    Attributes:
        key: Item identity.
        content: Item payload.
    """

    key: str
    content: Any = None


class LeaveTarget(BaseModel):
    """Exit target for an item animating out of the stack."""

    x: float
    y: float


class CommandResponse(BaseModel):
    """Response model for swipe/release/undo/redo/reset.

    Attributes:
        applied: Whether the command changed anything.
        direction: Direction of the swipe that was applied, undone or redone.
        item: Item that left (swipe/redo) or returned (undo).
        disabled: Whether the stack is now empty.
        can_undo: Whether an undo is available.
        can_redo: Whether a redo is available.
        remaining: Number of items left.
        leave: Exit target to animate, if an item left.
        message: Why the command was ignored, if it was.
    """

    applied: bool
    direction: Direction | None = None
    item: Item | None = None
    disabled: bool
    can_undo: bool
    can_redo: bool
    remaining: int
    leave: LeaveTarget | None = None
    message: str | None = None


class SwiperStateResponse(BaseModel):
    """Response model for swiper state."""

    swiper_id: str
    disabled: bool
    can_undo: bool
    can_redo: bool
    remaining: int
    undo_count: int
    redo_count: int
    history_enabled: bool
    boundary: float
    visible_count: int


class VisibleItem(BaseModel):
    """A displayed item with its stacking order."""

    key: str
    content: Any = None
    index: int
    z_index: int
    active: bool


class VisibleItemsResponse(BaseModel):
    """Response model for the displayed items."""

    items: list[VisibleItem]
    total: int


class DragResponse(BaseModel):
    """Response model for a drag-progress sample."""

    x: float
    y: float
    opacity: float


class ClassifyResponse(BaseModel):
    """Response model for offset classification."""

    direction: Direction | None = None
    opacity: float
    boundary: float


def _classify_body(x: float, y: float, boundary: float | None) -> dict[str, Any]:
    body: dict[str, Any] = {"x": x, "y": y}
    if boundary is not None:
        body["boundary"] = boundary
    return body


# Synchronous SwiperClient


class SwiperClient:
    """Synchronous client for the swiper endpoints (/swiper/*).

    Example:
        with SwiperAPIClient() as client:
            result = client.swiper.release(x=180, y=0)
            if result.applied:
                print(f"{result.item.key} left {result.direction}")

            if client.swiper.state().can_undo:
                client.swiper.undo()
    """

    _BASE_PATH = "/swiper"

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def state(self) -> SwiperStateResponse:
        """Get the current flags and configuration."""
        return SwiperStateResponse(**self._http.get(f"{self._BASE_PATH}/state"))

    def items(self) -> VisibleItemsResponse:
        """Get the items the renderer should display, top first."""
        return VisibleItemsResponse(**self._http.get(f"{self._BASE_PATH}/items"))

    def swipe(self, direction: Direction) -> CommandResponse:
        """Swipe the top item.

        Args:
            direction: "left", "right", "up" or "down".

        Returns:
            What happened and the flags afterwards.

        Raises:
            ValidationError: If the direction is not recognised.
        """
        data = self._http.post(f"{self._BASE_PATH}/swipe", json={"direction": direction})
        return CommandResponse(**data)

    def release(self, x: float, y: float) -> CommandResponse:
        """Report the end of a drag gesture.

        Args:
            x: Final horizontal displacement.
            y: Final vertical displacement.

        Returns:
            What happened and the flags afterwards.
        """
        data = self._http.post(f"{self._BASE_PATH}/release", json={"x": x, "y": y})
        return CommandResponse(**data)

    def drag(self, x: float, y: float) -> DragResponse:
        """Forward a drag-progress sample."""
        data = self._http.post(f"{self._BASE_PATH}/drag", json={"x": x, "y": y})
        return DragResponse(**data)

    def classify(self, x: float, y: float, boundary: float | None = None) -> ClassifyResponse:
        """Classify an offset without changing state.

        Args:
            x: Horizontal displacement.
            y: Vertical displacement.
            boundary: Classifier boundary (default: the server's boundary).
        """
        data = self._http.post(
            f"{self._BASE_PATH}/classify", json=_classify_body(x, y, boundary)
        )
        return ClassifyResponse(**data)

    def undo(self) -> CommandResponse:
        """Undo the most recent swipe."""
        return CommandResponse(**self._http.post(f"{self._BASE_PATH}/undo"))

    def redo(self) -> CommandResponse:
        """Redo the most recently undone swipe."""
        return CommandResponse(**self._http.post(f"{self._BASE_PATH}/redo"))

    def reset(self) -> CommandResponse:
        """Restore the initial items and clear the history."""
        return CommandResponse(**self._http.post(f"{self._BASE_PATH}/reset"))


# Asynchronous AsyncSwiperClient


class AsyncSwiperClient:
    """Asynchronous client for the swiper endpoints (/swiper/*).

    Example:
        async with AsyncSwiperAPIClient() as client:
            await client.swiper.swipe("left")
            state = await client.swiper.state()
    """

    _BASE_PATH = "/swiper"

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    async def state(self) -> SwiperStateResponse:
        return SwiperStateResponse(**await self._http.get(f"{self._BASE_PATH}/state"))

    async def items(self) -> VisibleItemsResponse:
        return VisibleItemsResponse(**await self._http.get(f"{self._BASE_PATH}/items"))

    async def swipe(self, direction: Direction) -> CommandResponse:
        data = await self._http.post(f"{self._BASE_PATH}/swipe", json={"direction": direction})
        return CommandResponse(**data)

    async def release(self, x: float, y: float) -> CommandResponse:
        data = await self._http.post(f"{self._BASE_PATH}/release", json={"x": x, "y": y})
        return CommandResponse(**data)

    async def drag(self, x: float, y: float) -> DragResponse:
        data = await self._http.post(f"{self._BASE_PATH}/drag", json={"x": x, "y": y})
        return DragResponse(**data)

    async def classify(
        self, x: float, y: float, boundary: float | None = None
    ) -> ClassifyResponse:
        data = await self._http.post(
            f"{self._BASE_PATH}/classify", json=_classify_body(x, y, boundary)
        )
        return ClassifyResponse(**data)

    async def undo(self) -> CommandResponse:
        return CommandResponse(**await self._http.post(f"{self._BASE_PATH}/undo"))

    async def redo(self) -> CommandResponse:
        return CommandResponse(**await self._http.post(f"{self._BASE_PATH}/redo"))

    async def reset(self) -> CommandResponse:
        return CommandResponse(**await self._http.post(f"{self._BASE_PATH}/reset"))
