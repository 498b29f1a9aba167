"""Exception types shared across the gateway."""

from __future__ import annotations


class TransportError(ConnectionError):
    """Raised when the controller cannot be reached or the exchange breaks off."""

    def __init__(self, message: str, *, host: str | None = None, port: int | None = None):
        super().__init__(message)
        self.host = host
        self.port = port

    def __str__(self) -> str:
        base = super().__str__()
        if self.host is None:
            return base
        return f"{base} ({self.host}:{self.port})"
