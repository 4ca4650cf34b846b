"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared SwiperEngine.
"""

import logging
from typing import Annotated, Any, Iterable, Optional

from fastapi import Depends

from models.config import SwiperConfig, items_from_env
from models.engine import SwiperEngine

logger = logging.getLogger(__name__)


# Global state
# One engine per process; the REST surface drives a single swiper
_swiper_engine: SwiperEngine | None = None


def get_swiper_engine() -> SwiperEngine:
    """Get the shared SwiperEngine instance.

    This function is a FastAPI dependency. Route handlers receive the
    engine by declaring a SwiperEngineDep parameter.

    Returns:
        The shared SwiperEngine instance.

    Raises:
        RuntimeError: If the engine hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(engine: SwiperEngineDep):
            return engine.get_state()
    """
    if _swiper_engine is None:
        raise RuntimeError(
            "SwiperEngine not initialized. Call initialize_swiper_engine() first."
        )

    return _swiper_engine


def initialize_swiper_engine(
    items: Optional[Iterable[Any]] = None,
    config: Optional[SwiperConfig] = None,
) -> SwiperEngine:
    """Initialize the shared SwiperEngine instance.

    This should be called once when the FastAPI app starts up. Missing
    arguments are read from SWIPER_* environment variables.

    Args:
        items: Initial item contents (default: SWIPER_ITEMS).
        config: Swiper configuration (default: SwiperConfig.from_env()).

    Returns:
        The newly created SwiperEngine instance.

    Raises:
        InvalidConfigurationError: If the configuration is invalid.
    """
    global _swiper_engine

    if config is None:
        config = SwiperConfig.from_env()
    if items is None:
        items = items_from_env()

    _swiper_engine = SwiperEngine(list(items), config)
    return _swiper_engine


def shutdown_swiper_engine() -> None:
    """Release the shared SwiperEngine.

    This should be called when the FastAPI app shuts down.
    """
    global _swiper_engine

    if _swiper_engine is not None:
        logger.info(f"Releasing swiper {_swiper_engine.swiper_id}")

    _swiper_engine = None


# Type alias for dependency injection
SwiperEngineDep = Annotated[SwiperEngine, Depends(get_swiper_engine)]
