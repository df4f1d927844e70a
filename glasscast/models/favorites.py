"""Favorite city models and the user identity they belong to."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from glasscast.models.common import UserId


@dataclass(frozen=True)
class UserSession:
    """Identity passed explicitly to whatever acts on behalf of a user."""

    user_id: UserId


@dataclass(frozen=True)
class FavoriteCity:
    id: UUID
    user_id: UserId
    city: str
    created_at: datetime | None = None

    def matches(self, city: str) -> bool:
        """Case-insensitive city name comparison."""
        return self.city.casefold() == city.casefold()

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "FavoriteCity":
        """Build from a remote row. Raises KeyError/TypeError/ValueError on bad shape."""
        if not isinstance(row, dict):
            raise TypeError(f"Expected a row object, got {type(row).__name__}")
        created_raw = row.get("created_at")
        return cls(
            id=UUID(str(row["id"])),
            user_id=UUID(str(row["user_id"])),
            city=str(row["city"]),
            created_at=datetime.fromisoformat(created_raw) if created_raw else None,
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "city": self.city,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
