"""Common types and helpers shared across models."""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeAlias
from uuid import UUID

UserId: TypeAlias = UUID

# Clock/Sleep capability: awaited wherever simulated I/O needs latency.
Sleeper: TypeAlias = Callable[[float], Awaitable[None]]


def utc_now() -> datetime:
    return datetime.now(UTC)
