"""Tests for config schema validation."""

import uuid

import pytest
from pydantic import ValidationError

from glasscast.config.defaults import DEFAULT_USER_ID
from glasscast.config.schema import (
    AppConfig,
    FavoritesConfig,
    FavoritesMode,
    WeatherConfig,
)


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.weather.default_city == "Cupertino"
        assert config.favorites.mode == FavoritesMode.SIMULATION
        assert config.session.user_id == DEFAULT_USER_ID

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            AppConfig(unknown_field="bad")

    def test_nested_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            FavoritesConfig(mode="live", bogus=True)

    def test_user_id_parsed(self):
        config = AppConfig(session={"user_id": "6f1c2a9e-3b7d-4e7a-9a51-0c2d8e4f1a10"})
        assert config.session.user_id == uuid.UUID("6f1c2a9e-3b7d-4e7a-9a51-0c2d8e4f1a10")


class TestWeatherConfig:
    def test_latency_defaults(self):
        config = WeatherConfig()
        assert config.current_latency_ms == 450
        assert config.forecast_latency_ms == 300

    def test_negative_latency_rejected(self):
        with pytest.raises(ValidationError):
            WeatherConfig(current_latency_ms=-1)

    def test_empty_city_rejected(self):
        with pytest.raises(ValidationError):
            WeatherConfig(default_city="")


class TestFavoritesConfig:
    def test_live_mode(self):
        config = FavoritesConfig(mode="live", api_key="k")
        assert config.mode == FavoritesMode.LIVE

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValidationError):
            FavoritesConfig(mode="demo")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            FavoritesConfig(timeout_seconds=0.0)
