"""Swiper orchestration model.

This module contains the SwiperEngine, which owns the item stack and its
history and exposes the public commands (swipe, undo, redo, reset) plus the
drag entry points used by the gesture-capture collaborator.
"""

import logging
import uuid
import warnings
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from models.config import DEFAULT_HISTORY_DEPTH, SwiperConfig
from models.event import (
    DragEvent,
    EngineState,
    EventKind,
    LeaveEvent,
    Listener,
    SwipeEvent,
    VisibleItem,
)
from models.exceptions import HistoryDisabledWarning, InvalidConfigurationError
from models.geometry import (
    Offset,
    SwipeDirection,
    classify_direction,
    estimate_opacity,
    is_active_index,
    leave_offset,
)
from models.history import HistoryStore, HistoryUnavailable
from models.stack import ItemStack, SwiperItem

logger = logging.getLogger(__name__)


class SwiperEngine(BaseModel):
    """Main orchestrator for a swiper stack.

    Coordinates the item stack, the undo/redo history and event delivery.
    Every command runs to completion synchronously; listeners are called
    after the mutation, so a listener that issues another command sees the
    updated state.

    Responsibilities:
    - Swipe commands (programmatic or from a classified drag release)
    - Undo/redo/reset of the stack through the history ledger
    - Derived flags (disabled, can_undo, can_redo)
    - Event delivery to swipe/leave/drag/state listeners
    - Logging of every mutation and every ignored command

    Attributes:
        config: Validated swiper configuration.
        initial_items: The stack as supplied at construction (reset target).
        swiper_id: Unique identifier for this engine instance.

    Examples:
        swipes = []
        engine = SwiperEngine(
            ["A", "B", "C"],
            boundary=100,
            history_enabled=True,
            history_depth=5,
            on_swipe=swipes.append,
        )

        engine.release(Offset(x=180, y=0))
        # swipes[0].direction == SwipeDirection.RIGHT, swipes[0].item.content == "A"

        engine.undo()
        # engine.items.contents() == ["A", "B", "C"]
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SwiperConfig
    initial_items: ItemStack
    swiper_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    _stack: ItemStack = PrivateAttr()
    _history: HistoryStore = PrivateAttr()
    _listeners: dict[EventKind, list[Listener]] = PrivateAttr(default_factory=dict)

    def __init__(
        self,
        items: Union[ItemStack, Iterable[Any]] = (),
        config: Optional[SwiperConfig] = None,
        *,
        on_swipe: Optional[Callable[[SwipeEvent], None]] = None,
        on_leave: Optional[Callable[[LeaveEvent], None]] = None,
        on_drag: Optional[Callable[[DragEvent], None]] = None,
        on_state_change: Optional[Callable[[EngineState], None]] = None,
        **config_values: Any,
    ):
        """Initialize the engine and validate its configuration.

        Args:
            items: Initial items in display order (payloads, SwiperItems or an ItemStack).
            config: Swiper configuration. When omitted, config_values are used.
            on_swipe: Listener for SwipeEvent.
            on_leave: Listener for LeaveEvent.
            on_drag: Listener for DragEvent.
            on_state_change: Listener for EngineState after every mutation.
            **config_values: SwiperConfig fields, used when config is None.

        Raises:
            InvalidConfigurationError: If the configuration or items are invalid.
        """
        if config is None:
            config = SwiperConfig.load(**config_values)
        else:
            if config_values:
                raise InvalidConfigurationError(
                    "config", "pass either a SwiperConfig or field values, not both"
                )
            # Re-validate in case the config was built with model_construct()
            config = SwiperConfig.load(**config.to_dict())

        if isinstance(items, ItemStack):
            stack = items
        else:
            try:
                stack = ItemStack.from_contents(items)
            except ValidationError as e:
                raise InvalidConfigurationError("items", e.errors()[0]["msg"]) from e

        super().__init__(config=config, initial_items=stack)

        depth = config.history_depth if config.history_depth > 0 else DEFAULT_HISTORY_DEPTH
        self._stack = stack
        self._history = HistoryStore(enabled=config.history_enabled, depth=depth)
        if config.history_enabled:
            self._history.reset(stack)

        for kind, listener in (
            (EventKind.SWIPE, on_swipe),
            (EventKind.LEAVE, on_leave),
            (EventKind.DRAG, on_drag),
            (EventKind.STATE, on_state_change),
        ):
            if listener is not None:
                self.subscribe(kind, listener)

        logger.info(
            f"Swiper {self.swiper_id} created with {len(stack)} items "
            f"(boundary={config.boundary}, history="
            f"{config.history_depth if config.history_enabled else 'off'})"
        )

    # ===== Read Access =====

    @property
    def items(self) -> ItemStack:
        """The current item stack (an immutable snapshot)."""
        return self._stack

    @property
    def disabled(self) -> bool:
        """True when no items are left to swipe."""
        return self._stack.is_empty()

    @property
    def can_undo(self) -> bool:
        """True when a swipe can be undone."""
        return self._history.enabled and self._history.can_undo

    @property
    def can_redo(self) -> bool:
        """True when an undone swipe can be redone."""
        return self._history.enabled and self._history.can_redo

    @property
    def history_enabled(self) -> bool:
        return self._history.is_enabled()

    def get_state(self) -> EngineState:
        """Get the derived flags for the current stack and history.

        Returns:
            EngineState snapshot.
        """
        return EngineState(
            disabled=self.disabled,
            can_undo=self.can_undo,
            can_redo=self.can_redo,
            remaining=len(self._stack),
            undo_count=self._history.undo_count if self._history.enabled else 0,
            redo_count=self._history.redo_count if self._history.enabled else 0,
        )

    def get_snapshot(self) -> dict[str, Any]:
        """Get a serializable snapshot of the engine.

        Returns:
            Dict with configuration, current items, flags and history summaries.
        """
        state = self.get_state()
        return {
            "swiper_id": self.swiper_id,
            "config": self.config.to_dict(),
            "items": [item.model_dump() for item in self._stack.items],
            "state": state.model_dump(),
            "history": {
                "enabled": self._history.enabled,
                "undo": self._history.get_undo_summary(),
                "redo": self._history.get_redo_summary(),
            },
        }

    def visible_items(self) -> list[VisibleItem]:
        """Get the items the renderer should display, top first.

        Returns:
            Up to visible_count items with their stacking order and active flag.
        """
        total = len(self._stack)
        shown = self._stack.visible(self.config.visible_count)
        return [
            VisibleItem(
                item=item,
                index=index,
                z_index=total - index,
                active=is_active_index(len(shown) - 1 - index, self.config.visible_count, total),
            )
            for index, item in enumerate(shown)
        ]

    # ===== Listeners =====

    def subscribe(self, kind: Union[EventKind, str], listener: Listener) -> Callable[[], None]:
        """Register a listener for one kind of event.

        Args:
            kind: The event kind to listen for.
            listener: Callable receiving the event value.

        Returns:
            A callable that removes the listener again.
        """
        kind = EventKind(kind)
        self._listeners.setdefault(kind, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(kind, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: EventKind, event: Any) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners.get(kind, [])):
            listener(event)

    def _publish_state(self) -> None:
        if self._listeners.get(EventKind.STATE):
            self._emit(EventKind.STATE, self.get_state())

    # ===== Gesture Entry Points =====

    def drag(self, offset: Offset) -> DragEvent:
        """Forward a drag-progress sample.

        Does not change any state.

        Args:
            offset: Current cumulative drag displacement.

        Returns:
            The DragEvent delivered to drag listeners.
        """
        event = DragEvent(offset=offset, opacity=estimate_opacity(offset, self.config.boundary))
        self._emit(EventKind.DRAG, event)
        return event

    def release(self, offset: Offset) -> dict[str, Any]:
        """Handle the end of a drag gesture.

        The classifier runs with twice the configured boundary, so an item
        is swiped once the dominant axis moves further than `boundary`.

        Args:
            offset: Final cumulative drag displacement.

        Returns:
            The swipe result, or a not-applied result for gestures in the dead zone.
        """
        direction = classify_direction(offset, self.config.boundary * 2)
        if direction is None:
            logger.debug(f"Release at ({offset.x}, {offset.y}) below swipe boundary")
            return self._result(False, message="Gesture did not reach the swipe boundary")
        return self.swipe(direction)

    # ===== Commands =====

    def swipe(self, direction: Union[SwipeDirection, str]) -> dict[str, Any]:
        """Swipe the top item off the stack.

        Records the resulting stack in the history (if enabled), then emits
        a SwipeEvent and a LeaveEvent.

        Args:
            direction: Direction of the swipe.

        Returns:
            Dict with:
                - applied: Whether an item was swiped.
                - direction: The swipe direction.
                - item: The removed item (None if nothing was swiped).
                - disabled / can_undo / can_redo / remaining: Flags after the swipe.
                - message: Present when the swipe was ignored.

        Raises:
            ValueError: If direction is not a valid swipe direction.
        """
        direction = SwipeDirection(direction)

        if self._stack.is_empty():
            logger.warning(f"swipe({direction.value}) ignored, stack is empty")
            return self._result(False, direction=direction, message="Nothing to swipe")

        item, remaining = self._stack.pop_top()
        self._stack = remaining
        if self._history.enabled:
            self._history.record(remaining, direction)

        logger.info(
            f"Swiped item {item.key} {direction.value}, {len(remaining)} items remaining"
        )

        self._emit(EventKind.SWIPE, SwipeEvent(direction=direction, item=item))
        self._emit(EventKind.LEAVE, LeaveEvent(direction=direction, offset=leave_offset(direction)))
        self._publish_state()

        return self._result(True, direction=direction, item=item)

    def undo(self) -> dict[str, Any]:
        """Undo the most recent swipe.

        Returns:
            Dict with:
                - applied: Whether a swipe was undone.
                - direction: Direction of the swipe that was undone.
                - item: The item returned to the top of the stack.
                - disabled / can_undo / can_redo / remaining: Flags after the undo.
                - message: Present when the undo was ignored.
        """
        if not self._history.enabled:
            return self._report_history_disabled("undo")

        result = self._history.undo(self._stack)
        if isinstance(result, HistoryUnavailable):
            logger.warning(f"undo() ignored: {result.reason}")
            return self._result(False, message=result.reason)

        undone = self._history.future[0].direction
        self._stack = self._stack.restore(result.stack)

        logger.info(
            f"Undid {undone.value if undone else 'baseline'} swipe, "
            f"{len(self._stack)} items restored"
        )
        self._publish_state()

        return self._result(True, direction=undone, item=self._stack.peek_top())

    def redo(self) -> dict[str, Any]:
        """Redo the most recently undone swipe.

        If the restored entry was produced by a swipe, a LeaveEvent is
        emitted with replay=True so the renderer can play the exit again.

        Returns:
            Dict with the same keys as undo(); direction and item describe
            the swipe that was replayed.
        """
        if not self._history.enabled:
            return self._report_history_disabled("redo")

        before = self._stack
        result = self._history.redo(before)
        if isinstance(result, HistoryUnavailable):
            logger.warning(f"redo() ignored: {result.reason}")
            return self._result(False, message=result.reason)

        self._stack = self._stack.restore(result.stack)
        direction = result.direction

        if direction is not None:
            self._emit(
                EventKind.LEAVE,
                LeaveEvent(direction=direction, offset=leave_offset(direction), replay=True),
            )

        logger.info(
            f"Redid {direction.value if direction else 'baseline'} swipe, "
            f"{len(self._stack)} items remaining"
        )
        self._publish_state()

        return self._result(True, direction=direction, item=before.peek_top())

    def reset(self) -> dict[str, Any]:
        """Restore the construction-time items and the baseline history.

        Works with history disabled, in which case only the items are restored
        and a HistoryDisabledWarning is reported for the skipped history reset.

        Returns:
            Dict with applied=True and the flags after the reset.
        """
        self._stack = self._stack.restore(self.initial_items)
        if self._history.enabled:
            self._history.reset(self.initial_items)
        else:
            message = "reset() restored items only, history is disabled"
            logger.warning(message)
            warnings.warn(message, HistoryDisabledWarning, stacklevel=2)

        logger.info(f"Swiper {self.swiper_id} reset to {len(self._stack)} items")
        self._publish_state()

        return self._result(True)

    # ===== Internal Helpers =====

    def _report_history_disabled(self, operation: str) -> dict[str, Any]:
        message = f"{operation}() ignored, history is disabled"
        logger.warning(message)
        warnings.warn(message, HistoryDisabledWarning, stacklevel=3)
        return self._result(False, message="History is disabled")

    def _result(
        self,
        applied: bool,
        direction: Optional[SwipeDirection] = None,
        item: Optional[SwiperItem] = None,
        message: Optional[str] = None,
    ) -> dict[str, Any]:
        state = self.get_state()
        result: dict[str, Any] = {
            "applied": applied,
            "direction": direction,
            "item": item,
            "disabled": state.disabled,
            "can_undo": state.can_undo,
            "can_redo": state.can_redo,
            "remaining": state.remaining,
        }
        if message is not None:
            result["message"] = message
        return result
