"""Weather source interface and the in-memory source used for demos."""

import asyncio
import calendar
import logging
import random
from typing import Protocol

from glasscast.models.common import Sleeper
from glasscast.models.weather import (
    FORECAST_DAYS,
    CurrentConditions,
    ForecastDay,
    WeatherTheme,
)

logger = logging.getLogger(__name__)

# (temperature, condition, high, low, symbol, theme)
_PRESETS: list[tuple[int, str, int, int, str, WeatherTheme]] = [
    (72, "Sunny", 76, 58, "sun.max.fill", WeatherTheme.SUNNY),
    (61, "Rain", 64, 55, "cloud.rain.fill", WeatherTheme.RAINY),
    (66, "Windy", 69, 57, "wind", WeatherTheme.WINDY),
    (34, "Snow", 36, 28, "snow", WeatherTheme.COLD_SNOWY),
    (84, "Humid", 90, 73, "humidity.fill", WeatherTheme.HOT_HUMID),
    (68, "Fog", 70, 60, "cloud.fog.fill", WeatherTheme.FOGGY),
    (59, "Storm", 62, 52, "cloud.bolt.rain.fill", WeatherTheme.STORMY),
]

_FORECAST_SYMBOLS = [
    "sun.max.fill",
    "cloud.sun.fill",
    "cloud.rain.fill",
    "cloud.bolt.fill",
    "cloud.fog.fill",
    "wind",
    "snow",
]

# Sunday first, matching the usual short weekday symbol order.
_WEEKDAYS = [calendar.day_abbr[(i + 6) % 7] for i in range(7)]


class RemoteWeatherSource(Protocol):
    """Fetches weather for a city.

    Implementations raise TransportError or DecodeError on failure.
    """

    async def fetch_current(self, city: str) -> CurrentConditions: ...

    async def fetch_forecast(self, city: str) -> tuple[ForecastDay, ...]: ...


class SimulatedWeatherSource:
    """Random but plausible weather with artificial latency."""

    def __init__(
        self,
        current_latency: float = 0.45,
        forecast_latency: float = 0.30,
        sleep: Sleeper = asyncio.sleep,
        rng: random.Random | None = None,
    ):
        self.current_latency = current_latency
        self.forecast_latency = forecast_latency
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def fetch_current(self, city: str) -> CurrentConditions:
        await self._sleep(self.current_latency)
        temperature, condition, high, low, symbol, theme = self._rng.choice(_PRESETS)
        logger.debug("Simulated current conditions for %s: %s", city, condition)
        return CurrentConditions(
            city=city,
            temperature=temperature,
            condition=condition,
            high=high,
            low=low,
            symbol_name=symbol,
            theme=theme,
        )

    async def fetch_forecast(self, city: str) -> tuple[ForecastDay, ...]:
        await self._sleep(self.forecast_latency)
        start = self._rng.randrange(len(_WEEKDAYS))
        days = []
        for i in range(FORECAST_DAYS):
            low = self._rng.randint(40, 70)
            days.append(
                ForecastDay(
                    weekday=_WEEKDAYS[(start + i) % len(_WEEKDAYS)],
                    high=low + self._rng.randint(4, 18),
                    low=low,
                    symbol_name=self._rng.choice(_FORECAST_SYMBOLS),
                )
            )
        return tuple(days)
