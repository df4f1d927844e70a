"""Loading state shared by anything that fetches for display."""

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar


class LoadPhase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState:
    """Idle | Loading | Loaded | Failed(message).

    Only FAILED carries a message. Use the class constants for the other
    phases and ``LoadState.failed(msg)`` for failures.
    """

    phase: LoadPhase
    message: str = ""

    IDLE: ClassVar["LoadState"]
    LOADING: ClassVar["LoadState"]
    LOADED: ClassVar["LoadState"]

    @classmethod
    def failed(cls, message: str) -> "LoadState":
        return cls(LoadPhase.FAILED, message)

    @property
    def is_loading(self) -> bool:
        return self.phase == LoadPhase.LOADING

    @property
    def is_failed(self) -> bool:
        return self.phase == LoadPhase.FAILED

    def __str__(self) -> str:
        if self.is_failed:
            return f"{self.phase}({self.message})"
        return str(self.phase)


LoadState.IDLE = LoadState(LoadPhase.IDLE)
LoadState.LOADING = LoadState(LoadPhase.LOADING)
LoadState.LOADED = LoadState(LoadPhase.LOADED)
