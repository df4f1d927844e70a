"""Favorites store: the single writer of a user's favorite cities.

Mutations are applied locally only after the backend confirms them. In
simulation mode the backend confirms immediately, in live mode only after the
remote round trip. Remote failures never raise out of the store; they are
reported through ``error_message`` and the local collection is left as is.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx

from glasscast.favorites.backends import FavoritesBackend, LiveBackend, SimulatedBackend
from glasscast.ingest.errors import GlasscastError
from glasscast.ingest.supabase_client import RemoteFavoritesSource
from glasscast.models.common import Sleeper, UserId
from glasscast.models.favorites import FavoriteCity, UserSession

logger = logging.getLogger(__name__)

# What a backend call may fail with. Anything else is a bug and propagates.
REMOTE_ERRORS = (GlasscastError, httpx.HTTPError)


class FavoritesStore:
    def __init__(
        self,
        simulated: FavoritesBackend,
        live_backend: FavoritesBackend | None,
        session: UserSession,
        live: bool = False,
    ):
        self._simulated = simulated
        self._live_backend = live_backend
        self.session = session
        self._favorites: tuple[FavoriteCity, ...] = ()
        self._is_loading = False
        self._error_message: str | None = None
        self._pristine = True
        self._lock = asyncio.Lock()
        self._listeners: list[Callable[[], None]] = []
        self._live = False
        self.live = live

    @classmethod
    def create(
        cls,
        session: UserSession,
        remote: RemoteFavoritesSource | None = None,
        live: bool = False,
        latency: float = 0.2,
        sleep: Sleeper = asyncio.sleep,
    ) -> "FavoritesStore":
        """Build a store with a simulated backend and, if given, a live one."""
        return cls(
            simulated=SimulatedBackend(latency=latency, sleep=sleep),
            live_backend=LiveBackend(remote) if remote is not None else None,
            session=session,
            live=live,
        )

    # --- Observable state ---

    @property
    def favorites(self) -> tuple[FavoriteCity, ...]:
        return self._favorites

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error_message(self) -> str | None:
        """Last remote failure, cleared at the start of every operation."""
        return self._error_message

    @property
    def user_id(self) -> UserId:
        return self.session.user_id

    @property
    def live(self) -> bool:
        return self._live

    @live.setter
    def live(self, value: bool) -> None:
        if value and self._live_backend is None:
            raise ValueError("Live mode needs a remote favorites source")
        if value != self._live:
            logger.info("Favorites mode -> %s", "live" if value else "simulation")
        self._live = value

    def add_listener(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Call ``callback`` after every state change. Returns a remover."""
        self._listeners.append(callback)
        return lambda: self._listeners.remove(callback)

    # --- Operations ---

    async def load(self) -> None:
        """Populate the collection for the session's user."""
        async with self._lock:
            self._begin()
            self._set_loading(True)
            try:
                favorites = await self._backend().load(
                    self.user_id, self._favorites, self._pristine
                )
            except REMOTE_ERRORS as e:
                self._record_failure("load favorites", e)
            else:
                self._favorites = tuple(favorites)
            finally:
                self._set_loading(False)

    def is_favorite(self, city: str) -> FavoriteCity | None:
        for favorite in self._favorites:
            if favorite.matches(city):
                return favorite
        return None

    async def toggle(self, city: str) -> None:
        """Remove ``city`` if it is a favorite, otherwise add it."""
        async with self._lock:
            self._begin()
            existing = self.is_favorite(city)
            if existing is not None:
                await self._remove(existing.id)
            else:
                await self._add(city)

    async def clear_all(self) -> None:
        """Delete every favorite, attempting each one even after failures.

        The local collection ends up empty whatever the remote outcome.
        """
        async with self._lock:
            self._begin()
            backend = self._backend()
            ids = [favorite.id for favorite in self._favorites]
            failures = 0
            for favorite_id in ids:
                try:
                    await backend.delete(favorite_id)
                except REMOTE_ERRORS as e:
                    failures += 1
                    self._record_failure(f"delete favorite {favorite_id}", e)
            if failures:
                logger.warning(
                    "Cleared favorites locally; %d of %d remote deletes failed",
                    failures, len(ids),
                )
            self._pristine = False
            self._favorites = ()
            self._notify()

    # --- Internals ---

    def _backend(self) -> FavoritesBackend:
        if self._live:
            assert self._live_backend is not None
            return self._live_backend
        return self._simulated

    async def _add(self, city: str) -> None:
        try:
            created = await self._backend().insert(self.user_id, city)
        except REMOTE_ERRORS as e:
            self._record_failure(f"add favorite {city}", e)
            return
        self._pristine = False
        self._favorites = (created, *self._favorites)
        self._notify()

    async def _remove(self, favorite_id: Any) -> None:
        try:
            await self._backend().delete(favorite_id)
        except REMOTE_ERRORS as e:
            self._record_failure(f"remove favorite {favorite_id}", e)
            return
        self._pristine = False
        self._favorites = tuple(f for f in self._favorites if f.id != favorite_id)
        self._notify()

    def _begin(self) -> None:
        if self._error_message is not None:
            self._error_message = None
            self._notify()

    def _set_loading(self, loading: bool) -> None:
        self._is_loading = loading
        self._notify()

    def _record_failure(self, action: str, error: Exception) -> None:
        logger.warning("Failed to %s: %s", action, error)
        self._error_message = str(error) or type(error).__name__
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()
