"""Exception handlers for the swiper FastAPI application.

This module converts Python exceptions into consistent JSON responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)


async def invalid_configuration_handler(request: Request, exc: InvalidConfigurationError):
    """Handle InvalidConfigurationError exceptions.

    Returns a 400 naming the offending configuration field.

    Args:
        request: The incoming request that triggered the error.
        exc: The InvalidConfigurationError exception.

    Returns:
        JSONResponse with 400 status.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Configuration",
            "detail": str(exc),
            "field": exc.field,
            "type": "InvalidConfigurationError",
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised inside route handlers.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions, such as an uninitialized engine.

    Args:
        request: The incoming request that triggered the error.
        exc: The RuntimeError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the full traceback and returns a generic message so stack traces
    are not exposed to clients.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
