"""Tests for config loading and get/set."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from glasscast.config.loader import get_config_value, load_config, set_config_value
from glasscast.config.schema import AppConfig, FavoritesMode


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.weather.current_latency_ms == 0
        assert config.favorites.latency_ms == 0
        assert config.favorites.mode == FavoritesMode.SIMULATION

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config == AppConfig()

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "nope.yaml") == AppConfig()

    def test_invalid_yaml_values_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"favorites": {"mode": "sometimes"}}, f)
        with pytest.raises(ValidationError):
            load_config(path)


class TestGetConfigValue:
    def test_dotted_key(self, default_config: AppConfig):
        assert get_config_value(default_config, "weather.default_city") == "Cupertino"

    def test_top_level(self, default_config: AppConfig):
        val = get_config_value(default_config, "favorites")
        assert val.mode == FavoritesMode.SIMULATION

    def test_invalid_key(self, default_config: AppConfig):
        with pytest.raises(KeyError):
            get_config_value(default_config, "nonexistent.key")


class TestSetConfigValue:
    def test_set_and_revalidate(self, default_config: AppConfig):
        new_config = set_config_value(default_config, "favorites.mode", "live")
        assert new_config.favorites.mode == FavoritesMode.LIVE
        assert default_config.favorites.mode == FavoritesMode.SIMULATION

    def test_set_string_coercion(self, default_config: AppConfig):
        new_config = set_config_value(default_config, "weather.current_latency_ms", "10")
        assert new_config.weather.current_latency_ms == 10
        new_config = set_config_value(default_config, "favorites.timeout_seconds", "2.5")
        assert new_config.favorites.timeout_seconds == 2.5

    def test_invalid_value_raises(self, default_config: AppConfig):
        with pytest.raises(ValidationError):
            set_config_value(default_config, "weather.forecast_latency_ms", -5)

    def test_unknown_key_raises(self, default_config: AppConfig):
        with pytest.raises(KeyError):
            set_config_value(default_config, "weather.color", "blue")
