"""Default city, seed favorites, and the fallback user identity."""

from uuid import UUID

DEFAULT_CITY = "Cupertino"

# Seeded into an untouched simulated favorites collection, newest first.
SEED_CITIES: list[str] = ["Cupertino", "London"]

DEFAULT_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
