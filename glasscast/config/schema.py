"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from glasscast.config.defaults import DEFAULT_CITY, DEFAULT_USER_ID


class FavoritesMode(StrEnum):
    SIMULATION = "simulation"
    LIVE = "live"


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_city: str = Field(default=DEFAULT_CITY, min_length=1)
    current_latency_ms: int = Field(default=450, ge=0)
    forecast_latency_ms: int = Field(default=300, ge=0)


class FavoritesConfig(BaseModel):
    model_config = {"extra": "forbid"}

    mode: FavoritesMode = FavoritesMode.SIMULATION
    latency_ms: int = Field(default=200, ge=0)
    base_url: str = "https://example.supabase.co/rest/v1"
    api_key: str = ""  # falls back to SUPABASE_API_KEY
    table: str = Field(default="favorites", min_length=1)
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class SessionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    user_id: UUID = DEFAULT_USER_ID


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather: WeatherConfig = WeatherConfig()
    favorites: FavoritesConfig = FavoritesConfig()
    session: SessionConfig = SessionConfig()
