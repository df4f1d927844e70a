"""Favorites backends: in-memory simulation and live remote delegation."""

import asyncio
import logging
import uuid
from typing import Any, Protocol

from glasscast.config.defaults import SEED_CITIES
from glasscast.ingest.supabase_client import RemoteFavoritesSource
from glasscast.models.common import Sleeper, UserId, utc_now
from glasscast.models.favorites import FavoriteCity

logger = logging.getLogger(__name__)


class FavoritesBackend(Protocol):
    async def load(
        self,
        user_id: UserId,
        current: tuple[FavoriteCity, ...],
        pristine: bool,
    ) -> list[FavoriteCity]:
        """Return the collection the store should hold after a load.

        ``pristine`` is True until the store has applied its first mutation.
        """
        ...

    async def insert(self, user_id: UserId, city: str) -> FavoriteCity: ...

    async def delete(self, favorite_id: Any) -> None: ...


class SimulatedBackend:
    """No network: the store's own collection is the source of truth."""

    def __init__(self, latency: float = 0.2, sleep: Sleeper = asyncio.sleep):
        self.latency = latency
        self._sleep = sleep

    async def load(
        self,
        user_id: UserId,
        current: tuple[FavoriteCity, ...],
        pristine: bool,
    ) -> list[FavoriteCity]:
        await self._sleep(self.latency)
        if current or not pristine:
            return list(current)
        logger.info("SIMULATED: seeding %d favorites", len(SEED_CITIES))
        return [_new_favorite(user_id, city) for city in SEED_CITIES]

    async def insert(self, user_id: UserId, city: str) -> FavoriteCity:
        logger.info("SIMULATED: add favorite %s", city)
        return _new_favorite(user_id, city)

    async def delete(self, favorite_id: Any) -> None:
        logger.info("SIMULATED: remove favorite %s", favorite_id)


class LiveBackend:
    """Delegates every call to a remote favorites source."""

    def __init__(self, remote: RemoteFavoritesSource):
        self.remote = remote

    async def load(
        self,
        user_id: UserId,
        current: tuple[FavoriteCity, ...],
        pristine: bool,
    ) -> list[FavoriteCity]:
        favorites = await self.remote.fetch_all(user_id)
        logger.info("LIVE: loaded %d favorites", len(favorites))
        return favorites

    async def insert(self, user_id: UserId, city: str) -> FavoriteCity:
        logger.info("LIVE: add favorite %s", city)
        return await self.remote.insert(user_id, city)

    async def delete(self, favorite_id: Any) -> None:
        logger.info("LIVE: remove favorite %s", favorite_id)
        await self.remote.delete(favorite_id)


def _new_favorite(user_id: UserId, city: str) -> FavoriteCity:
    return FavoriteCity(id=uuid.uuid4(), user_id=user_id, city=city, created_at=utc_now())
