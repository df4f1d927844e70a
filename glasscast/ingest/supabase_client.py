"""Supabase (PostgREST) client for the favorites table."""

import logging
import os
from typing import Any, Protocol

import httpx

from glasscast.ingest.errors import DecodeError, TransportError
from glasscast.models.common import UserId
from glasscast.models.favorites import FavoriteCity

logger = logging.getLogger(__name__)

SUPABASE_REST_BASE = "https://example.supabase.co/rest/v1"
FAVORITES_TABLE = "favorites"


class RemoteFavoritesSource(Protocol):
    """Remote store of favorite cities.

    Every method raises TransportError on a non-2xx response or network
    failure, and DecodeError on a malformed response.
    """

    async def fetch_all(self, user_id: UserId) -> list[FavoriteCity]: ...

    async def insert(self, user_id: UserId, city: str) -> FavoriteCity: ...

    async def delete(self, favorite_id: Any) -> None: ...


class SupabaseFavoritesClient:
    """Thin async wrapper around the PostgREST endpoint of one table.

    Rows are filtered with PostgREST operators (``user_id=eq.<id>``) and
    inserts ask for the created row back via ``Prefer: return=representation``.
    """

    def __init__(
        self,
        base_url: str = SUPABASE_REST_BASE,
        api_key: str | None = None,
        table: str = FAVORITES_TABLE,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key or os.environ.get("SUPABASE_API_KEY", "")
        if not self.api_key:
            raise TransportError("SUPABASE_API_KEY not set")
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        params: dict[str, str] | None = None,
        data: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        """Make an authenticated request against the table endpoint."""
        url = f"{self.base_url}/{self.table}"
        try:
            resp = await self._client.request(
                method, url, params=params, json=data,
                headers=self._headers(prefer), timeout=self.timeout,
            )
        except httpx.RequestError as e:
            logger.error("Supabase request failed: %s %s -> %s", method, self.table, e)
            raise TransportError(f"Request failed: {e}") from e
        if not resp.is_success:
            body = resp.text
            logger.error("Supabase %d: %s %s -> %s", resp.status_code, method, self.table, body)
            raise TransportError(f"HTTP {resp.status_code}: {body}", resp.status_code, body)
        return resp

    async def fetch_all(self, user_id: UserId) -> list[FavoriteCity]:
        """List a user's favorites, newest first."""
        resp = await self._request("GET", params={
            "select": "*",
            "order": "created_at.desc",
            "user_id": f"eq.{str(user_id).lower()}",
        })
        return _decode_rows(resp)

    async def insert(self, user_id: UserId, city: str) -> FavoriteCity:
        """Insert a favorite and return the row the server created."""
        resp = await self._request(
            "POST",
            data=[{"user_id": str(user_id).lower(), "city": city}],
            prefer="return=representation",
        )
        rows = _decode_rows(resp)
        if not rows:
            raise DecodeError("Insert returned no rows")
        return rows[0]

    async def delete(self, favorite_id: Any) -> None:
        await self._request(
            "DELETE",
            params={"id": f"eq.{str(favorite_id).lower()}"},
            prefer="return=minimal",
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _decode_rows(resp: httpx.Response) -> list[FavoriteCity]:
    try:
        payload = resp.json()
    except ValueError as e:
        raise DecodeError(f"Malformed JSON from favorites endpoint: {e}") from e
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a list of rows, got {type(payload).__name__}")
    try:
        return [FavoriteCity.from_row(row) for row in payload]
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Malformed favorite row: {e}") from e
