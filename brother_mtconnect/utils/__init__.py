"""Small utilities shared across modules."""

from .time import monotonic_ms, utc_timestamp

__all__ = ["monotonic_ms", "utc_timestamp"]
