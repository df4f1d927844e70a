"""Current conditions and forecast models."""

from dataclasses import dataclass
from enum import StrEnum

FORECAST_DAYS = 5


class WeatherTheme(StrEnum):
    SUNNY = "sunny"
    RAINY = "rainy"
    WINDY = "windy"
    COLD_SNOWY = "cold_snowy"
    HOT_HUMID = "hot_humid"
    FOGGY = "foggy"
    STORMY = "stormy"


@dataclass(frozen=True)
class CurrentConditions:
    city: str
    temperature: int
    condition: str
    high: int
    low: int
    symbol_name: str  # icon token, e.g. "sun.max.fill"
    theme: WeatherTheme


@dataclass(frozen=True)
class ForecastDay:
    weekday: str  # short label, e.g. "Mon"
    high: int
    low: int
    symbol_name: str
