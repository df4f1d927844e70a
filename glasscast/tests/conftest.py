"""Shared test fixtures."""

import asyncio
import uuid
from pathlib import Path

import pytest
import yaml

from glasscast.config.defaults import DEFAULT_USER_ID
from glasscast.ingest.errors import TransportError
from glasscast.models.common import UserId, utc_now
from glasscast.models.favorites import FavoriteCity, UserSession
from glasscast.models.weather import CurrentConditions, ForecastDay, WeatherTheme


async def _no_sleep(seconds: float) -> None:
    await asyncio.sleep(0)


class FakeWeatherSource:
    """Counts calls; fetches for a gated city block until the gate opens."""

    def __init__(self):
        self.current_calls: list[str] = []
        self.forecast_calls: list[str] = []
        self.current_errors: dict[str, Exception] = {}
        self.forecast_errors: dict[str, Exception] = {}
        self._gates: dict[str, asyncio.Event] = {}

    def gate(self, city: str) -> asyncio.Event:
        return self._gates.setdefault(city, asyncio.Event())

    async def fetch_current(self, city: str) -> CurrentConditions:
        self.current_calls.append(city)
        if city in self._gates:
            await self._gates[city].wait()
        if city in self.current_errors:
            raise self.current_errors[city]
        return CurrentConditions(
            city=city,
            temperature=72,
            condition="Sunny",
            high=76,
            low=58,
            symbol_name="sun.max.fill",
            theme=WeatherTheme.SUNNY,
        )

    async def fetch_forecast(self, city: str) -> tuple[ForecastDay, ...]:
        self.forecast_calls.append(city)
        if city in self.forecast_errors:
            raise self.forecast_errors[city]
        if city in self._gates:
            await self._gates[city].wait()
        return tuple(
            ForecastDay(weekday=day, high=70 + i, low=50 + i, symbol_name="cloud.sun.fill")
            for i, day in enumerate(["Mon", "Tue", "Wed", "Thu", "Fri"])
        )


class FakeFavoritesRemote:
    """In-memory remote favorites table with injectable failures."""

    def __init__(self, rows: list[FavoriteCity] | None = None):
        self.rows: list[FavoriteCity] = list(rows or [])
        self.insert_error: Exception | None = None
        self.delete_error: Exception | None = None
        self.fail_first_deletes = 0
        self.insert_calls: list[str] = []
        self.delete_calls: list[uuid.UUID] = []

    async def fetch_all(self, user_id: UserId) -> list[FavoriteCity]:
        rows = [r for r in self.rows if r.user_id == user_id]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    async def insert(self, user_id: UserId, city: str) -> FavoriteCity:
        self.insert_calls.append(city)
        if self.insert_error is not None:
            raise self.insert_error
        favorite = FavoriteCity(id=uuid.uuid4(), user_id=user_id, city=city, created_at=utc_now())
        self.rows.append(favorite)
        return favorite

    async def delete(self, favorite_id: uuid.UUID) -> None:
        self.delete_calls.append(favorite_id)
        if len(self.delete_calls) <= self.fail_first_deletes:
            raise TransportError("HTTP 503: unavailable", 503, "unavailable")
        if self.delete_error is not None:
            raise self.delete_error
        self.rows = [r for r in self.rows if r.id != favorite_id]


@pytest.fixture
def no_sleep():
    """Sleeper that yields to the loop without waiting."""
    return _no_sleep


@pytest.fixture
def weather_source() -> FakeWeatherSource:
    return FakeWeatherSource()


@pytest.fixture
def remote() -> FakeFavoritesRemote:
    return FakeFavoritesRemote()


@pytest.fixture
def session() -> UserSession:
    return UserSession(user_id=DEFAULT_USER_ID)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a config with no artificial latency and return its path."""
    data = {
        "weather": {"default_city": "Cupertino", "current_latency_ms": 0, "forecast_latency_ms": 0},
        "favorites": {"mode": "simulation", "latency_ms": 0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
