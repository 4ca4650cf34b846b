"""Gesture geometry helpers.

This module holds the pure functions that share the drag-offset model:
- classify_direction: Turns a drag-release offset into a swipe direction
- estimate_opacity: Turns a drag offset into a 0..1 visual intensity
- leave_offset: Exit target handed to the renderer after a swipe
- compare_opacity: Tolerant equality for opacity values
- is_active_index: Which displayed slot of the stack is interactive

None of these functions validate the boundary. SwiperConfig guarantees
boundary > 0 before any of them is reached.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# Distance an item travels off-screen when it leaves the stack
LEAVE_DISTANCE = 2000.0

# Two opacities closer than this are considered equal
OPACITY_TOLERANCE = 0.05


class SwipeDirection(str, Enum):
    """Direction of a completed swipe."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def is_horizontal(self) -> bool:
        """Whether the direction lies on the x-axis."""
        return self in (SwipeDirection.LEFT, SwipeDirection.RIGHT)


class Offset(BaseModel):
    """Cumulative drag displacement since the gesture started.

    Args:
        x: Horizontal displacement (positive = right).
        y: Vertical displacement (positive = down).
    """

    x: float = Field(default=0.0, description="Horizontal displacement")
    y: float = Field(default=0.0, description="Vertical displacement")

    def scaled(self, factor: float) -> "Offset":
        """Return a copy of this offset multiplied by factor."""
        return Offset(x=self.x * factor, y=self.y * factor)


def classify_direction(offset: Offset, boundary: float) -> Optional[SwipeDirection]:
    """Classify a drag-release offset into a swipe direction.

    Offsets within half the boundary on both axes fall in the dead zone.
    Otherwise the axis with the larger magnitude decides; on a tie the
    vertical axis wins.

    Args:
        offset: Final cumulative drag displacement.
        boundary: Classifier boundary (must be positive).

    Returns:
        The swipe direction, or None if the gesture does not count.

    Examples:
        >>> classify_direction(Offset(x=120, y=0), 100)
        <SwipeDirection.RIGHT: 'right'>
        >>> classify_direction(Offset(x=60, y=-60), 100)
        <SwipeDirection.UP: 'up'>
    """
    abs_x = abs(offset.x)
    abs_y = abs(offset.y)
    half = boundary / 2

    if abs_x <= half and abs_y <= half:
        return None

    if abs_x > abs_y:
        if offset.x > half:
            return SwipeDirection.RIGHT
        if offset.x < -half:
            return SwipeDirection.LEFT
    else:
        if offset.y > half:
            return SwipeDirection.DOWN
        if offset.y < -half:
            return SwipeDirection.UP

    return None


def estimate_opacity(offset: Offset, boundary: float) -> float:
    """Estimate the visual intensity of a drag in progress.

    Args:
        offset: Current cumulative drag displacement.
        boundary: Swipe boundary (must be positive).

    Returns:
        The larger per-axis progress, each clamped to 1.0.
    """
    pct_x = min(abs(offset.x) / boundary, 1.0)
    pct_y = min(abs(offset.y) / boundary, 1.0)
    return max(pct_x, pct_y)


def leave_offset(direction: SwipeDirection, distance: float = LEAVE_DISTANCE) -> Offset:
    """Get the exit target for an item leaving in the given direction.

    Args:
        direction: Direction the item leaves in.
        distance: How far off-screen the item travels.

    Returns:
        Offset on the direction's axis, zero on the other axis.
    """
    sign = -1.0 if direction in (SwipeDirection.LEFT, SwipeDirection.UP) else 1.0
    if direction.is_horizontal:
        return Offset(x=sign * distance, y=0.0)
    return Offset(x=0.0, y=sign * distance)


def compare_opacity(
    first: float,
    second: float,
    tolerance: float = OPACITY_TOLERANCE,
) -> bool:
    """Check whether two opacities are equal within a tolerance.

    Both values are rounded to two decimal places before comparing.

    Args:
        first: First opacity value.
        second: Second opacity value.
        tolerance: Largest difference still considered equal.

    Returns:
        True if the rounded values differ by at most the tolerance.
    """
    # Slack for binary rounding, e.g. 0.55 - 0.5 > 0.05
    return abs(round(first, 2) - round(second, 2)) <= tolerance + 1e-9


def is_active_index(index: int, visible_count: int, total: int) -> bool:
    """Check whether a displayed slot holds the interactive item.

    Slots are counted in back-to-front render order, so the top item of the
    stack is drawn last.

    Args:
        index: Position in render order (0 = drawn first, at the back).
        visible_count: How many items the renderer displays.
        total: Number of items remaining in the stack.

    Returns:
        True for the active slot, and always True when one item or fewer remain.
    """
    if total <= 1:
        return True
    return index == min(total, visible_count) - 1
