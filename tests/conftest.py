"""Pytest configuration and shared fixtures."""

import pytest

# Load environment variables from .env file at test startup
# Fixtures below build their engines explicitly, so SWIPER_* values only
# affect tests that read the environment on purpose
from dotenv import load_dotenv
load_dotenv()

# Import all fixtures from fixture modules
pytest_plugins = [
    "tests.fixtures.swiper",
    "tests.fixtures.api",
]
