"""Main entry point for the Swiper FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST control surface for a swiper stack.

To run the development server:
    uv run uvicorn main:app --reload

The engine is configured from SWIPER_* environment variables (a .env file
in the working directory is loaded first).
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_swiper_engine, shutdown_swiper_engine
from api.exceptions import (
    generic_exception_handler,
    invalid_configuration_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import swiper as swiper_routes
from models.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Loads .env, creates the shared SwiperEngine at startup and releases it
    at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    load_dotenv()
    engine = initialize_swiper_engine()
    logger.info(f"Swiper {engine.swiper_id} ready with {len(engine.items)} items")

    yield  # App runs and handles requests here

    shutdown_swiper_engine()
    logger.info("Shutdown complete")


# Create the FastAPI application instance
app = FastAPI(
    title="Swiper",
    description="Gesture classification and undoable history for a stack of swipeable items",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Order matters: specific exceptions before general ones
app.add_exception_handler(InvalidConfigurationError, invalid_configuration_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(swiper_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Swiper API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}
