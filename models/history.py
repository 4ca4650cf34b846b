"""Undo/Redo history models.

This module provides the bounded history ledger for the swiper stack:
- HistoryEntry: A stack snapshot plus the swipe direction that produced it
- HistoryUnavailable: Returned when an undo/redo has nothing to work with
- HistoryStore: The past/future ledger with a depth-bounded past

Each entry in `past` holds the stack as it stood after the transition that
produced it, so the last entry of `past` always mirrors the current stack.
The first entry is the baseline (direction None). `past` is bounded to
depth + 1 entries, oldest dropped first. `future` is not capped; it only
grows through undo, so it can never exceed the number of undos just made.
"""

import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from models.exceptions import HistoryDisabledWarning
from models.geometry import SwipeDirection
from models.stack import ItemStack

logger = logging.getLogger(__name__)


class HistoryEntry(BaseModel):
    """A single point in the stack's history.

    Args:
        stack: Snapshot of the item stack at this point.
        direction: Swipe direction that produced the snapshot (None for baseline).

    Examples:
        # Baseline entry
        HistoryEntry(stack=ItemStack.from_contents(["A", "B"]))

        # Entry after swiping A to the right
        HistoryEntry(stack=ItemStack.from_contents(["B"]), direction="right")
    """

    stack: ItemStack = Field(description="Snapshot of the item stack")
    direction: Optional[SwipeDirection] = Field(
        default=None,
        description="Swipe direction that produced this snapshot",
    )

    @property
    def is_baseline(self) -> bool:
        """Whether this entry was not produced by a swipe."""
        return self.direction is None

    def to_dict(self) -> dict[str, Any]:
        """Convert this entry to a dictionary.

        Returns:
            Dictionary representation suitable for serialization.
        """
        return {
            "keys": self.stack.keys(),
            "contents": self.stack.contents(),
            "direction": self.direction.value if self.direction else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Create a HistoryEntry from a dictionary.

        Args:
            data: Dictionary as produced by to_dict().

        Returns:
            New HistoryEntry instance.
        """
        stack = ItemStack(
            items=tuple(
                {"key": key, "content": content}
                for key, content in zip(data["keys"], data["contents"])
            )
        )
        return cls(stack=stack, direction=data.get("direction"))


class HistoryUnavailable(BaseModel):
    """Result of an undo/redo that could not be applied.

    This is a routine outcome, not an error. Callers are expected to
    consult can_undo/can_redo first, but asking anyway is harmless.

    Args:
        operation: "undo" or "redo".
        reason: Why the operation was not applied.
    """

    operation: str
    reason: str


HistoryResult = Union[HistoryEntry, HistoryUnavailable]


class HistoryStore(BaseModel):
    """Bounded undo/redo ledger of item stack snapshots.

    - record() appends a new entry and clears the future (timeline divergence)
    - undo() moves the last past entry to the front of the future
    - redo() moves the front future entry back onto the past
    - reset() returns to a single baseline entry

    When disabled, every operation is a logged no-op.

    Args:
        enabled: Whether history is recorded at all.
        depth: Maximum number of transitions retained for undo.
        past: Entries available for undo, oldest first, baseline included.
        future: Entries available for redo, next redo first.

    Examples:
        store = HistoryStore(enabled=True, depth=2)
        store.reset(ItemStack.from_contents(["A", "B", "C"]))

        _, rest = current.pop_top()
        store.record(rest, SwipeDirection.RIGHT)

        result = store.undo(rest)
        if isinstance(result, HistoryEntry):
            current = result.stack
    """

    enabled: bool = Field(default=False, description="Whether history is recorded")
    depth: int = Field(default=10, description="Maximum transitions retained for undo")
    past: list[HistoryEntry] = Field(
        default_factory=list,
        description="Entries available for undo (most recent at end)",
    )
    future: list[HistoryEntry] = Field(
        default_factory=list,
        description="Entries available for redo (next redo first)",
    )

    @field_validator("depth")
    @classmethod
    def validate_depth(cls, v: int) -> int:
        """Validate that depth is positive.

        Raises:
            ValueError: If depth is not positive.
        """
        if v <= 0:
            raise ValueError("depth must be positive")
        return v

    @model_validator(mode="after")
    def trim_past_to_depth(self) -> "HistoryStore":
        """Trim past entries if they exceed depth + 1.

        Returns:
            The validated HistoryStore.
        """
        if len(self.past) > self.depth + 1:
            # Keep most recent entries
            self.past = self.past[-(self.depth + 1) :]
        return self

    @property
    def can_undo(self) -> bool:
        """Check if an undo is available (something beyond the baseline)."""
        return len(self.past) > 1

    @property
    def can_redo(self) -> bool:
        """Check if a redo is available."""
        return len(self.future) > 0

    @property
    def undo_count(self) -> int:
        """Get the number of undos available."""
        return max(len(self.past) - 1, 0)

    @property
    def redo_count(self) -> int:
        """Get the number of redos available."""
        return len(self.future)

    def is_enabled(self) -> bool:
        """Check whether history is recorded."""
        return self.enabled

    def _report_disabled(self, operation: str) -> HistoryUnavailable:
        logger.warning(
            f"{HistoryDisabledWarning.__name__}: {operation}() ignored, history is disabled"
        )
        return HistoryUnavailable(operation=operation, reason="history is disabled")

    def _trim_past(self) -> None:
        while len(self.past) > self.depth + 1:
            dropped = self.past.pop(0)
            logger.debug(
                f"History depth {self.depth} exceeded, dropped entry with "
                f"{len(dropped.stack)} items"
            )

    def record(self, snapshot: ItemStack, direction: SwipeDirection) -> None:
        """Record the stack produced by a swipe.

        Appends the entry, trims the oldest entries beyond depth + 1, and
        clears the future since this starts a new timeline.

        Args:
            snapshot: The stack after the swipe.
            direction: The swipe direction.
        """
        if not self.enabled:
            self._report_disabled("record")
            return

        self.past.append(HistoryEntry(stack=snapshot, direction=direction))
        self._trim_past()
        self.future.clear()

    def undo(self, current: ItemStack) -> HistoryResult:
        """Step one transition back.

        Pops the last past entry and pushes the current stack, tagged with
        the popped entry's direction, onto the front of the future.

        Args:
            current: The stack before the undo.

        Returns:
            The entry now on top of past (the state to restore), or
            HistoryUnavailable if only the baseline remains.
        """
        if not self.enabled:
            return self._report_disabled("undo")

        if not self.can_undo:
            return HistoryUnavailable(operation="undo", reason="Nothing to undo")

        popped = self.past.pop()
        self.future.insert(0, HistoryEntry(stack=current, direction=popped.direction))
        return self.past[-1]

    def redo(self, current: ItemStack) -> HistoryResult:
        """Step one transition forward.

        Pops the front of the future and appends it to the past, trimming
        the past to depth + 1.

        Args:
            current: The stack before the redo.

        Returns:
            The popped entry (the state to restore), or HistoryUnavailable
            if the future is empty.
        """
        if not self.enabled:
            return self._report_disabled("redo")

        if not self.can_redo:
            return HistoryUnavailable(operation="redo", reason="Nothing to redo")

        popped = self.future.pop(0)
        logger.debug(
            f"Redo from {len(current)} to {len(popped.stack)} items "
            f"({popped.direction.value if popped.direction else 'baseline'})"
        )
        self.past.append(popped)
        self._trim_past()
        return popped

    def reset(self, baseline: ItemStack) -> None:
        """Replace the history with a single baseline entry.

        Args:
            baseline: The stack to use as the baseline.
        """
        if not self.enabled:
            self._report_disabled("reset")
            return

        self.past = [HistoryEntry(stack=baseline)]
        self.future = []

    def clear(self) -> None:
        """Remove every entry, baseline included."""
        self.past.clear()
        self.future.clear()

    def get_undo_summary(self) -> list[dict[str, Any]]:
        """Get a summary of entries available for undo.

        Returns:
            List of dicts with direction and remaining item count.
            Ordered most recent first, baseline excluded.
        """
        return [
            {
                "direction": entry.direction.value if entry.direction else None,
                "remaining": len(entry.stack),
            }
            for entry in reversed(self.past[1:])
        ]

    def get_redo_summary(self) -> list[dict[str, Any]]:
        """Get a summary of entries available for redo.

        Returns:
            List of dicts with direction and remaining item count.
            Ordered next redo first.
        """
        return [
            {
                "direction": entry.direction.value if entry.direction else None,
                "remaining": len(entry.stack),
            }
            for entry in self.future
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert this history store to a dictionary.

        Returns:
            Dictionary representation suitable for serialization.
        """
        return {
            "enabled": self.enabled,
            "depth": self.depth,
            "past": [entry.to_dict() for entry in self.past],
            "future": [entry.to_dict() for entry in self.future],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryStore":
        """Create a HistoryStore from a dictionary.

        Args:
            data: Dictionary containing history store data.

        Returns:
            New HistoryStore instance.
        """
        return cls(
            enabled=data.get("enabled", False),
            depth=data.get("depth", 10),
            past=[HistoryEntry.from_dict(e) for e in data.get("past", [])],
            future=[HistoryEntry.from_dict(e) for e in data.get("future", [])],
        )
