"""Item stack models.

This module provides:
- SwiperItem: An opaque payload with a stable identity
- ItemStack: An immutable, ordered snapshot of items (index 0 = top)

ItemStack never changes in place. Popping returns a new snapshot, so
history entries can hold stacks by reference.
"""

from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.exceptions import EmptyStackError


class SwiperItem(BaseModel):
    """A single item in the swiper stack.

    Args:
        key: Stable identity of the item within its stack.
        content: Opaque payload handed back to the renderer.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Stable identity of the item")
    content: Any = Field(default=None, description="Opaque rendering payload")

    @field_validator("key", mode="before")
    @classmethod
    def validate_key(cls, v: Any) -> str:
        """Coerce integer keys to strings and reject empty keys.

        Raises:
            ValueError: If key is empty or whitespace.
        """
        if isinstance(v, int):
            v = str(v)
        if not isinstance(v, str) or not v.strip():
            raise ValueError("key cannot be empty")
        return v


class ItemStack(BaseModel):
    """Ordered snapshot of swiper items.

    Insertion order is display order; the first item is the topmost,
    active one.

    Args:
        items: Items in display order.

    Examples:
        stack = ItemStack.from_contents(["A", "B", "C"])
        top, rest = stack.pop_top()
        # top.content == "A", [i.content for i in rest] == ["B", "C"]
        # stack itself still holds A, B, C
    """

    model_config = ConfigDict(frozen=True)

    items: tuple[SwiperItem, ...] = Field(
        default_factory=tuple,
        description="Items in display order (index 0 = top)",
    )

    @field_validator("items")
    @classmethod
    def validate_unique_keys(cls, v: tuple[SwiperItem, ...]) -> tuple[SwiperItem, ...]:
        """Validate that no two items share a key.

        Raises:
            ValueError: If a key appears more than once.
        """
        seen: set[str] = set()
        for item in v:
            if item.key in seen:
                raise ValueError(f"duplicate item key '{item.key}'")
            seen.add(item.key)
        return v

    @classmethod
    def from_contents(cls, contents: Iterable[Any]) -> "ItemStack":
        """Build a stack from bare payloads, keyed by their index.

        SwiperItem instances are kept as they are.

        Args:
            contents: Payloads (or SwiperItems) in display order.

        Returns:
            New ItemStack.
        """
        items = [
            content if isinstance(content, SwiperItem) else SwiperItem(key=str(i), content=content)
            for i, content in enumerate(contents)
        ]
        return cls(items=tuple(items))

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        """Check whether the stack has no items left."""
        return len(self.items) == 0

    def peek_top(self) -> Optional[SwiperItem]:
        """Get the top item without removing it.

        Returns:
            The top item, or None if the stack is empty.
        """
        return self.items[0] if self.items else None

    def pop_top(self) -> tuple[SwiperItem, "ItemStack"]:
        """Remove the top item.

        Returns:
            Tuple of (removed item, snapshot of the remaining items).

        Raises:
            EmptyStackError: If the stack is empty.
        """
        if not self.items:
            raise EmptyStackError()
        return self.items[0], ItemStack(items=self.items[1:])

    def restore(self, snapshot: "ItemStack") -> "ItemStack":
        """Replace this stack's contents wholesale.

        Args:
            snapshot: The stack to restore.

        Returns:
            The snapshot, which becomes the current stack.
        """
        return snapshot

    def visible(self, count: int) -> list[SwiperItem]:
        """Get the top items the renderer should display.

        Args:
            count: Maximum number of items to return.

        Returns:
            Up to count items in display order.
        """
        return list(self.items[:count])

    def keys(self) -> list[str]:
        """Get the item keys in display order."""
        return [item.key for item in self.items]

    def contents(self) -> list[Any]:
        """Get the item payloads in display order."""
        return [item.content for item in self.items]
