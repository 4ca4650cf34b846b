"""Swiper control endpoints.

These endpoints drive the shared swiper: reading its state and visible
items, swiping (directly or from a drag release), forwarding drag progress,
classifying offsets, and undo/redo/reset.
"""

from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import SwiperEngineDep
from models.geometry import (
    Offset,
    SwipeDirection,
    classify_direction,
    estimate_opacity,
    leave_offset,
)
from models.stack import SwiperItem

# Create router for swiper endpoints
router = APIRouter(
    prefix="/swiper",
    tags=["swiper"],
)


# Request/Response Models


class OffsetRequest(BaseModel):
    """Request model carrying a drag offset.

    Attributes:
        x: Horizontal displacement (positive = right).
        y: Vertical displacement (positive = down).
    """

    x: float = 0.0
    y: float = 0.0


class ClassifyRequest(OffsetRequest):
    """Request model for classifying an offset without swiping.

    Attributes:
        boundary: Classifier boundary (default: the engine's boundary).
    """

    boundary: Optional[float] = Field(default=None, gt=0)


class SwipeRequest(BaseModel):
    """Request model for a programmatic swipe.

    Attributes:
        direction: Direction to swipe the top item in.
    """

    direction: SwipeDirection


class CommandResponse(BaseModel):
    """Response model for swipe/release/undo/redo/reset.

    Attributes:
        applied: Whether the command changed anything.
        direction: Direction of the swipe that was applied, undone or redone.
        item: Item that left (swipe/redo) or returned (undo).
        disabled: Whether the stack is now empty.
        can_undo: Whether an undo is available.
        can_redo: Whether a redo is available.
        remaining: Number of items left in the stack.
        leave: Exit target for the renderer, when an item should animate out.
        message: Why the command was ignored, if it was.
    """

    applied: bool
    direction: Optional[SwipeDirection] = None
    item: Optional[SwiperItem] = None
    disabled: bool
    can_undo: bool
    can_redo: bool
    remaining: int
    leave: Optional[Offset] = None
    message: Optional[str] = None


class SwiperStateResponse(BaseModel):
    """Response model for swiper state.

    Attributes:
        swiper_id: Unique identifier for the engine.
        disabled: Whether the stack is empty.
        can_undo: Whether an undo is available.
        can_redo: Whether a redo is available.
        remaining: Number of items left in the stack.
        undo_count: Number of undos available.
        redo_count: Number of redos available.
        history_enabled: Whether history is recorded.
        boundary: Swipe-trigger distance.
        visible_count: How many items the renderer displays.
    """

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


class VisibleItemResponse(BaseModel):
    """A displayed item.

    Attributes:
        key: Item identity.
        content: Item payload.
        index: Position in display order (0 = top).
        z_index: Stacking order, higher draws on top.
        active: Whether this slot is the interactive one.
    """

    key: str
    content: Any = None
    index: int
    z_index: int
    active: bool


class VisibleItemsResponse(BaseModel):
    """Response model for the displayed items.

    Attributes:
        items: Displayed items, top first.
        total: Number of items left in the stack.
    """

    items: list[VisibleItemResponse]
    total: int


class DragResponse(BaseModel):
    """Response model for a drag-progress sample.

    Attributes:
        x: Horizontal displacement echoed back.
        y: Vertical displacement echoed back.
        opacity: Visual intensity for the sample.
    """

    x: float
    y: float
    opacity: float


class ClassifyResponse(BaseModel):
    """Response model for offset classification.

    Attributes:
        direction: Classified direction (None in the dead zone).
        opacity: Visual intensity for the offset.
        boundary: Boundary used for classification.
    """

    direction: Optional[SwipeDirection] = None
    opacity: float
    boundary: float


def _command_response(result: dict[str, Any], leaves: bool = False) -> CommandResponse:
    """Build a CommandResponse from an engine result dict.

    Args:
        result: Result returned by an engine command.
        leaves: Whether an applied result means an item animates out.

    Returns:
        The response model.
    """
    direction = result.get("direction")
    leave = None
    if leaves and result["applied"] and direction is not None:
        leave = leave_offset(direction)

    return CommandResponse(**result, leave=leave)


# Route Handlers


@router.get("/state", response_model=SwiperStateResponse)
async def get_swiper_state(engine: SwiperEngineDep):
    """Get the current swiper flags and configuration.

    Args:
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        Current swiper state.
    """
    state = engine.get_state()
    return SwiperStateResponse(
        swiper_id=engine.swiper_id,
        disabled=state.disabled,
        can_undo=state.can_undo,
        can_redo=state.can_redo,
        remaining=state.remaining,
        undo_count=state.undo_count,
        redo_count=state.redo_count,
        history_enabled=engine.history_enabled,
        boundary=engine.config.boundary,
        visible_count=engine.config.visible_count,
    )


@router.get("/items", response_model=VisibleItemsResponse)
async def get_visible_items(engine: SwiperEngineDep):
    """Get the items the renderer should display.

    Args:
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        Up to visible_count items, top first.
    """
    visible = [
        VisibleItemResponse(
            key=v.item.key,
            content=v.item.content,
            index=v.index,
            z_index=v.z_index,
            active=v.active,
        )
        for v in engine.visible_items()
    ]
    return VisibleItemsResponse(items=visible, total=len(engine.items))


@router.post("/swipe", response_model=CommandResponse)
async def swipe(request: SwipeRequest, engine: SwiperEngineDep):
    """Swipe the top item in the given direction.

    Swiping an empty stack is not an error; the response reports
    applied=false.

    Args:
        request: The swipe direction.
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        What happened and the flags afterwards.
    """
    return _command_response(engine.swipe(request.direction), leaves=True)


@router.post("/release", response_model=CommandResponse)
async def release(request: OffsetRequest, engine: SwiperEngineDep):
    """Handle the end of a drag gesture.

    Args:
        request: Final cumulative drag offset.
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        What happened and the flags afterwards.
    """
    return _command_response(engine.release(Offset(x=request.x, y=request.y)), leaves=True)


@router.post("/drag", response_model=DragResponse)
async def drag(request: OffsetRequest, engine: SwiperEngineDep):
    """Forward a drag-progress sample.

    Args:
        request: Current cumulative drag offset.
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        The offset and its visual intensity.
    """
    event = engine.drag(Offset(x=request.x, y=request.y))
    return DragResponse(x=event.offset.x, y=event.offset.y, opacity=event.opacity)


@router.post("/classify", response_model=ClassifyResponse)
async def classify(request: ClassifyRequest, engine: SwiperEngineDep):
    """Classify an offset without changing any state.

    Args:
        request: Offset and optional boundary.
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        The direction and opacity for the offset.
    """
    boundary = request.boundary or engine.config.boundary
    offset = Offset(x=request.x, y=request.y)
    return ClassifyResponse(
        direction=classify_direction(offset, boundary),
        opacity=estimate_opacity(offset, boundary),
        boundary=boundary,
    )


@router.post("/undo", response_model=CommandResponse)
async def undo(engine: SwiperEngineDep):
    """Undo the most recent swipe.

    With nothing to undo, or history disabled, the response reports
    applied=false and a message.

    Args:
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        What happened and the flags afterwards.
    """
    return _command_response(engine.undo())


@router.post("/redo", response_model=CommandResponse)
async def redo(engine: SwiperEngineDep):
    """Redo the most recently undone swipe.

    Args:
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        What happened, the exit target to replay, and the flags afterwards.
    """
    return _command_response(engine.redo(), leaves=True)


@router.post("/reset", response_model=CommandResponse)
async def reset(engine: SwiperEngineDep):
    """Restore the initial items and clear the history.

    Args:
        engine: The SwiperEngine instance (injected by FastAPI).

    Returns:
        The flags after the reset.
    """
    return _command_response(engine.reset())
