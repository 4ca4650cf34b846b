"""Swiper event and state models.

The engine never animates anything itself. Instead it emits these values
to registered listeners, and the rendering collaborator decides what to do
with them.
"""

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, Field

from models.geometry import Offset, SwipeDirection
from models.stack import SwiperItem


class EventKind(str, Enum):
    """Kinds of events a listener can subscribe to."""

    SWIPE = "swipe"
    LEAVE = "leave"
    DRAG = "drag"
    STATE = "state"


class SwipeEvent(BaseModel):
    """Emitted right after the top item left the stack.

    Args:
        direction: Direction of the swipe.
        item: The item that was removed.
    """

    direction: SwipeDirection
    item: SwiperItem


class LeaveEvent(BaseModel):
    """Exit trigger for the renderer.

    Emitted on every swipe and again when a redo replays a swipe.

    Args:
        direction: Direction the item leaves in.
        offset: Exit target for the leaving item.
        replay: True when triggered by redo rather than a fresh swipe.
    """

    direction: SwipeDirection
    offset: Offset
    replay: bool = False


class DragEvent(BaseModel):
    """Drag-progress sample forwarded for visual feedback.

    Args:
        offset: Current cumulative drag displacement.
        opacity: Visual intensity derived from the offset.
    """

    offset: Offset
    opacity: float = Field(ge=0.0, le=1.0)


class EngineState(BaseModel):
    """Flags derived from the engine's stack and history.

    Args:
        disabled: True when the stack is empty.
        can_undo: True when something beyond the baseline can be undone.
        can_redo: True when an undone transition can be redone.
        remaining: Number of items left in the stack.
        undo_count: Number of undos available.
        redo_count: Number of redos available.
    """

    disabled: bool
    can_undo: bool
    can_redo: bool
    remaining: int = 0
    undo_count: int = 0
    redo_count: int = 0


class VisibleItem(BaseModel):
    """An item as the renderer should display it.

    Args:
        item: The stack item.
        index: Position in display order (0 = top).
        z_index: Stacking order, higher draws on top.
        active: Whether this slot is the interactive one.
    """

    item: SwiperItem
    index: int
    z_index: int
    active: bool


Listener = Callable[[Any], None]
