"""Exceptions and diagnostics raised by the swiper models.

Only InvalidConfigurationError ever reaches callers as a raised exception.
EmptyStackError is caught by the engine, HistoryDisabledWarning is logged,
and HistoryUnavailable is a returned sentinel (see models.history).
"""


class InvalidConfigurationError(ValueError):
    """Raised at construction when the swiper configuration is invalid.

    Args:
        field: Name of the offending configuration field.
        message: Description of the problem.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid configuration for '{field}': {message}")


class EmptyStackError(Exception):
    """Raised when popping the top item of an empty stack."""

    def __init__(self, message: str = "Cannot pop from an empty item stack"):
        self.message = message
        super().__init__(message)


class HistoryDisabledWarning(UserWarning):
    """Reported when a history operation is requested with history disabled."""
