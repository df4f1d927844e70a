"""Wires sources, the favorites store and coordinators from config."""

import logging

from glasscast.config.schema import AppConfig, FavoritesMode
from glasscast.favorites.store import FavoritesStore
from glasscast.ingest.supabase_client import SupabaseFavoritesClient
from glasscast.ingest.weather_source import RemoteWeatherSource, SimulatedWeatherSource
from glasscast.models.common import Sleeper
from glasscast.models.favorites import UserSession
from glasscast.weather.coordinator import WeatherLoadCoordinator

logger = logging.getLogger(__name__)


class AppContainer:
    """Holds the shared session, services and stores for one host."""

    def __init__(
        self,
        config: AppConfig,
        weather_source: RemoteWeatherSource,
        favorites_store: FavoritesStore,
        favorites_client: SupabaseFavoritesClient | None = None,
    ):
        self.config = config
        self.weather_source = weather_source
        self.favorites_store = favorites_store
        self.favorites_client = favorites_client

    @classmethod
    def from_config(cls, config: AppConfig, sleep: Sleeper | None = None) -> "AppContainer":
        """Build the default graph. The Supabase client exists in live mode only."""
        sleep_kwargs = {"sleep": sleep} if sleep is not None else {}
        session = UserSession(user_id=config.session.user_id)
        weather_source = SimulatedWeatherSource(
            current_latency=config.weather.current_latency_ms / 1000,
            forecast_latency=config.weather.forecast_latency_ms / 1000,
            **sleep_kwargs,
        )

        live = config.favorites.mode == FavoritesMode.LIVE
        client = None
        if live:
            client = SupabaseFavoritesClient(
                base_url=config.favorites.base_url,
                api_key=config.favorites.api_key or None,
                table=config.favorites.table,
                timeout=config.favorites.timeout_seconds,
            )
        store = FavoritesStore.create(
            session,
            remote=client,
            live=live,
            latency=config.favorites.latency_ms / 1000,
            **sleep_kwargs,
        )
        logger.info(
            "Container ready: user=%s favorites=%s",
            session.user_id, config.favorites.mode.value,
        )
        return cls(config, weather_source, store, client)

    def make_coordinator(self, city: str | None = None) -> WeatherLoadCoordinator:
        return WeatherLoadCoordinator(
            self.weather_source, city or self.config.weather.default_city
        )

    async def aclose(self) -> None:
        if self.favorites_client is not None:
            await self.favorites_client.aclose()
