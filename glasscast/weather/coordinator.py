"""Weather load coordinator: current conditions + forecast for one city.

Refreshes are single-flight. A refresh for the city already being fetched
returns at once and leaves the in-flight fetch to finish. A refresh after
the target city changed cancels the in-flight fetch and starts over. Every
fetch carries a generation token, and a completion whose token is no longer
current is dropped without touching state, so a late result can never
overwrite a newer one.
"""

import asyncio
import itertools
import logging
from collections.abc import Callable

from glasscast.config.defaults import DEFAULT_CITY
from glasscast.ingest.weather_source import RemoteWeatherSource
from glasscast.models.load_state import LoadState
from glasscast.models.weather import CurrentConditions, ForecastDay

logger = logging.getLogger(__name__)

WeatherPair = tuple[CurrentConditions, tuple[ForecastDay, ...]]


class WeatherLoadCoordinator:
    def __init__(self, source: RemoteWeatherSource, city: str = DEFAULT_CITY):
        self.source = source
        self.city = city
        self._state = LoadState.IDLE
        self._current: CurrentConditions | None = None
        self._forecast: tuple[ForecastDay, ...] = ()
        self._tokens = itertools.count(1)
        self._token = 0
        self._fetch: asyncio.Task[WeatherPair] | None = None
        self._fetch_city: str | None = None
        self._listeners: list[Callable[[], None]] = []

    # --- Observable state ---

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def current(self) -> CurrentConditions | None:
        return self._current

    @property
    def forecast(self) -> tuple[ForecastDay, ...]:
        return self._forecast

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error_message(self) -> str | None:
        return self._state.message if self._state.is_failed else None

    @property
    def has_loaded(self) -> bool:
        return self._current is not None

    def add_listener(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` after every state change. Returns a remover."""
        self._listeners.append(callback)
        return lambda: self._listeners.remove(callback)

    # --- Operations ---

    async def load(self) -> None:
        await self.refresh()

    async def refresh(self) -> None:
        """Fetch current conditions and forecast for ``self.city``."""
        city = self.city
        in_flight = self._fetch
        if in_flight is not None and not in_flight.done():
            if self._fetch_city == city:
                logger.debug("Refresh for %s already in flight, coalescing", city)
                return
            # Target changed: supersede the old fetch before starting a new one.
            token = self._mint()
            logger.info("Superseding refresh for %s with %s", self._fetch_city, city)
            self._fetch_city = city
            in_flight.cancel()
            try:
                await asyncio.wait([in_flight])
            except asyncio.CancelledError:
                if token == self._token:
                    self._set_state(LoadState.IDLE)
                raise
            if token != self._token:
                return
        else:
            token = self._mint()

        self._set_state(LoadState.LOADING)
        fetch = asyncio.create_task(self._fetch_pair(city))
        self._fetch = fetch
        self._fetch_city = city
        try:
            current, forecast = await fetch
        except asyncio.CancelledError:
            if token == self._token:
                self._set_state(LoadState.IDLE)
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.debug("Refresh for %s cancelled", city)
        except Exception as e:
            error = _unwrap(e)
            if token != self._token:
                logger.debug("Dropping stale failure for %s: %s", city, error)
                return
            logger.warning("Weather refresh for %s failed: %s", city, error)
            self._set_state(LoadState.failed(str(error) or type(error).__name__))
        else:
            if token != self._token:
                logger.debug("Dropping stale result for %s", city)
                return
            self._current = current
            self._forecast = forecast
            self._set_state(LoadState.LOADED)
        finally:
            if self._fetch is fetch:
                self._fetch = None
                self._fetch_city = None

    async def close(self) -> None:
        """Abandon any in-flight fetch. State returns to idle."""
        self._mint()
        fetch = self._fetch
        if fetch is not None and not fetch.done():
            fetch.cancel()
            await asyncio.wait([fetch])
        if self._state.is_loading:
            self._set_state(LoadState.IDLE)

    # --- Internals ---

    async def _fetch_pair(self, city: str) -> WeatherPair:
        async with asyncio.TaskGroup() as tg:
            current = tg.create_task(self.source.fetch_current(city))
            forecast = tg.create_task(self.source.fetch_forecast(city))
        return current.result(), tuple(forecast.result())

    def _mint(self) -> int:
        self._token = next(self._tokens)
        return self._token

    def _set_state(self, state: LoadState) -> None:
        self._state = state
        for callback in list(self._listeners):
            callback()


def _unwrap(error: Exception) -> Exception:
    """TaskGroup wraps child failures; report the first underlying one."""
    while isinstance(error, ExceptionGroup) and error.exceptions:
        error = error.exceptions[0]
    return error
