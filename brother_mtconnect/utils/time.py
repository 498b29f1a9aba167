"""Time helpers primarily to ease unit-testing."""

from __future__ import annotations

from datetime import datetime, timezone
import time


def utc_timestamp(moment: datetime | None = None) -> str:
    """Return an MTConnect style ISO-8601 UTC timestamp with a trailing ``Z``."""

    moment = moment or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def monotonic_ms() -> float:
    """Return the monotonic clock in milliseconds."""

    return time.monotonic() * 1000.0
