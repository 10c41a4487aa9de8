"""Unit tests for AppSettings."""

import pytest
from pydantic import ValidationError

from playledger.domain.settings import ApiSettings, AppSettings


class TestAppSettings:
    """Tests for AppSettings model."""

    def test_default_settings(self):
        """Default settings are created correctly."""
        settings = AppSettings()

        assert settings.api.base_url == "http://localhost:8080/api"
        assert settings.api.timeout_seconds is None
        assert settings.logging.level == "INFO"
        assert settings.ui_state.window_width == 1100

    def test_base_url_cannot_be_empty(self):
        settings = AppSettings()

        with pytest.raises(ValidationError):
            settings.api.base_url = ""

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            ApiSettings(timeout_seconds=0)

        assert ApiSettings(timeout_seconds=2.5).timeout_seconds == 2.5

    def test_valid_logging_levels(self):
        settings = AppSettings()

        settings.logging.level = "DEBUG"
        assert settings.logging.level == "DEBUG"

    def test_invalid_logging_level_raises_error(self):
        settings = AppSettings()

        with pytest.raises(ValidationError):
            settings.logging.level = "VERBOSE"

    def test_window_size_bounds(self):
        settings = AppSettings()

        with pytest.raises(ValidationError):
            settings.ui_state.window_width = 10

    def test_round_trip_through_json(self):
        settings = AppSettings()
        settings.api.base_url = "https://lounge.example.com/api"

        loaded = AppSettings.model_validate_json(settings.model_dump_json())
        assert loaded.api.base_url == "https://lounge.example.com/api"
