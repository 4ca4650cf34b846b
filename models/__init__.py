"""Swiper data models package.

This package contains the gesture-classification and history state machine
behind the swiper: drag geometry, the item stack, the undo/redo ledger,
configuration, emitted events, and the engine that ties them together.
"""

from models.config import SwiperConfig
from models.engine import SwiperEngine
from models.event import DragEvent, EngineState, EventKind, LeaveEvent, SwipeEvent, VisibleItem
from models.exceptions import EmptyStackError, HistoryDisabledWarning, InvalidConfigurationError
from models.geometry import (
    Offset,
    SwipeDirection,
    classify_direction,
    compare_opacity,
    estimate_opacity,
    is_active_index,
    leave_offset,
)
from models.history import HistoryEntry, HistoryStore, HistoryUnavailable
from models.stack import ItemStack, SwiperItem

__all__ = [
    "SwiperConfig",
    "SwiperEngine",
    "DragEvent",
    "EngineState",
    "EventKind",
    "LeaveEvent",
    "SwipeEvent",
    "VisibleItem",
    "EmptyStackError",
    "HistoryDisabledWarning",
    "InvalidConfigurationError",
    "Offset",
    "SwipeDirection",
    "classify_direction",
    "compare_opacity",
    "estimate_opacity",
    "is_active_index",
    "leave_offset",
    "HistoryEntry",
    "HistoryStore",
    "HistoryUnavailable",
    "ItemStack",
    "SwiperItem",
]
