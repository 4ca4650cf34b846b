"""Swiper configuration model.

SwiperConfig holds the settings validated at engine construction:
- boundary: Swipe-trigger distance
- visible_count: How many stack items the renderer displays
- history_enabled: Whether undo/redo/reset history is kept
- history_depth: Maximum number of transitions retained for undo

Configuration can also be read from the process environment (see from_env),
which is how the FastAPI app configures its shared engine.
"""

import math
import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from models.exceptions import InvalidConfigurationError


DEFAULT_BOUNDARY = 150.0
DEFAULT_VISIBLE_COUNT = 3
DEFAULT_HISTORY_DEPTH = 10

# Environment variable names read by from_env()
ENV_PREFIX = "SWIPER_"
ENV_ITEMS = "SWIPER_ITEMS"


class SwiperConfig(BaseModel):
    """Validated swiper configuration.

    Args:
        boundary: Swipe-trigger distance, must be positive.
        visible_count: Number of items the renderer displays, must be positive.
        history_enabled: Whether undo/redo history is recorded.
        history_depth: Undo depth, must be positive when history is enabled.

    Examples:
        config = SwiperConfig(boundary=100, history_enabled=True, history_depth=5)

        # Invalid values fail fast
        SwiperConfig.load(boundary=0)  # raises InvalidConfigurationError
    """

    boundary: float = Field(default=DEFAULT_BOUNDARY, description="Swipe-trigger distance")
    visible_count: int = Field(
        default=DEFAULT_VISIBLE_COUNT,
        description="How many stack items the renderer displays",
    )
    history_enabled: bool = Field(default=False, description="Whether history is recorded")
    history_depth: int = Field(
        default=DEFAULT_HISTORY_DEPTH,
        description="Maximum number of transitions retained for undo",
    )

    @field_validator("boundary")
    @classmethod
    def validate_boundary(cls, v: float) -> float:
        """Validate that boundary is a positive, finite number.

        Raises:
            ValueError: If boundary is zero, negative, NaN or infinite.
        """
        # nan <= 0 is False, so finiteness is checked explicitly
        if not math.isfinite(v) or v <= 0:
            raise ValueError("boundary must be positive and finite")
        return v

    @field_validator("visible_count")
    @classmethod
    def validate_visible_count(cls, v: int) -> int:
        """Validate that visible_count is positive.

        Raises:
            ValueError: If visible_count is zero or negative.
        """
        if v <= 0:
            raise ValueError("visible_count must be positive")
        return v

    @field_validator("history_depth")
    @classmethod
    def validate_history_depth(cls, v: int, info: ValidationInfo) -> int:
        """Validate history_depth, which only matters when history is enabled.

        Raises:
            ValueError: If history is enabled and depth is not positive.
        """
        if info.data.get("history_enabled") and v <= 0:
            raise ValueError("history_depth must be positive when history is enabled")
        return v

    @classmethod
    def load(cls, **values: Any) -> "SwiperConfig":
        """Build a config, converting validation failures.

        Args:
            **values: Field values for the config.

        Returns:
            The validated SwiperConfig.

        Raises:
            InvalidConfigurationError: If any value is invalid.
        """
        try:
            return cls(**values)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "config"
            raise InvalidConfigurationError(field, error["msg"]) from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SwiperConfig":
        """Build a config from SWIPER_* environment variables.

        Recognised variables are SWIPER_BOUNDARY, SWIPER_VISIBLE_COUNT,
        SWIPER_HISTORY_ENABLED and SWIPER_HISTORY_DEPTH. Unset variables
        keep their defaults.

        Args:
            environ: Mapping to read from (default: os.environ).

        Returns:
            The validated SwiperConfig.

        Raises:
            InvalidConfigurationError: If any variable holds an invalid value.
        """
        if environ is None:
            environ = os.environ

        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()

        return cls.load(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert this config to a dictionary.

        Returns:
            Dictionary representation suitable for serialization.
        """
        return {
            "boundary": self.boundary,
            "visible_count": self.visible_count,
            "history_enabled": self.history_enabled,
            "history_depth": self.history_depth,
        }


def items_from_env(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Read the initial item contents from SWIPER_ITEMS.

    Args:
        environ: Mapping to read from (default: os.environ).

    Returns:
        Stripped, non-empty comma-separated values (empty list if unset).
    """
    if environ is None:
        environ = os.environ
    raw = environ.get(ENV_ITEMS, "")
    return [part.strip() for part in raw.split(",") if part.strip()]
