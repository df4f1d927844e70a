"""Errors raised by remote weather and favorites sources."""


class GlasscastError(Exception):
    """Base class for failures a remote source can report."""


class TransportError(GlasscastError):
    """Raised on a non-2xx response or a network failure."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(GlasscastError):
    """Raised when a response cannot be turned into models."""
