"""Unit tests for SwiperConfig and environment loading."""

import pytest

from models.config import (
    DEFAULT_BOUNDARY,
    DEFAULT_HISTORY_DEPTH,
    DEFAULT_VISIBLE_COUNT,
    SwiperConfig,
    items_from_env,
)
from models.exceptions import InvalidConfigurationError


# =============================================================================
# Validation Tests
# =============================================================================


class TestSwiperConfigValidation:
    """Tests for SwiperConfig field validation."""

    def test_defaults(self):
        """A config without values uses the documented defaults."""
        config = SwiperConfig()
        assert config.boundary == DEFAULT_BOUNDARY
        assert config.visible_count == DEFAULT_VISIBLE_COUNT
        assert config.history_enabled is False
        assert config.history_depth == DEFAULT_HISTORY_DEPTH

    @pytest.mark.parametrize(
        "boundary", [0, -1, -150.5, float("nan"), "nan", float("inf"), "-inf"]
    )
    def test_non_positive_boundary_rejected(self, boundary):
        """Boundary must be positive and finite."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SwiperConfig.load(boundary=boundary)
        assert exc_info.value.field == "boundary"
        assert "boundary must be positive" in exc_info.value.message

    def test_non_positive_visible_count_rejected(self):
        """visible_count must be positive."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SwiperConfig.load(visible_count=0)
        assert exc_info.value.field == "visible_count"

    def test_depth_rejected_when_history_enabled(self):
        """A non-positive depth is invalid when history is on."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SwiperConfig.load(history_enabled=True, history_depth=0)
        assert exc_info.value.field == "history_depth"

    def test_depth_ignored_when_history_disabled(self):
        """A non-positive depth is accepted when history is off."""
        config = SwiperConfig.load(history_enabled=False, history_depth=0)
        assert config.history_depth == 0

    def test_error_is_value_error(self):
        """InvalidConfigurationError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Invalid configuration for 'boundary'"):
            SwiperConfig.load(boundary=-5)

    def test_to_dict(self):
        """to_dict returns every field."""
        config = SwiperConfig(boundary=80, history_enabled=True, history_depth=4)
        assert config.to_dict() == {
            "boundary": 80.0,
            "visible_count": DEFAULT_VISIBLE_COUNT,
            "history_enabled": True,
            "history_depth": 4,
        }


# =============================================================================
# Environment Tests
# =============================================================================


class TestSwiperConfigFromEnv:
    """Tests for SwiperConfig.from_env and items_from_env."""

    def test_reads_prefixed_variables(self):
        """SWIPER_* variables are parsed into the config."""
        config = SwiperConfig.from_env(
            {
                "SWIPER_BOUNDARY": "80",
                "SWIPER_VISIBLE_COUNT": "2",
                "SWIPER_HISTORY_ENABLED": "true",
                "SWIPER_HISTORY_DEPTH": "4",
            }
        )
        assert config.boundary == 80.0
        assert config.visible_count == 2
        assert config.history_enabled is True
        assert config.history_depth == 4

    def test_missing_and_blank_variables_use_defaults(self):
        """Unset or blank variables keep the defaults."""
        config = SwiperConfig.from_env({"SWIPER_BOUNDARY": "  "})
        assert config == SwiperConfig()

    def test_invalid_variable_raises(self):
        """Unparseable values raise InvalidConfigurationError."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SwiperConfig.from_env({"SWIPER_BOUNDARY": "wide"})
        assert exc_info.value.field == "boundary"

    def test_non_finite_variable_raises(self):
        """SWIPER_BOUNDARY=nan fails at load time, not on the first drag."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            SwiperConfig.from_env({"SWIPER_BOUNDARY": "nan"})
        assert exc_info.value.field == "boundary"

    def test_items_from_env(self):
        """SWIPER_ITEMS is split on commas, stripped, blanks dropped."""
        assert items_from_env({"SWIPER_ITEMS": " a, b,,c "}) == ["a", "b", "c"]

    def test_items_from_env_unset(self):
        """No SWIPER_ITEMS means no items."""
        assert items_from_env({}) == []
