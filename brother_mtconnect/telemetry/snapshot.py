"""Thread-safe key/value store shared by the poller and the publisher."""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping


class TelemetrySnapshot:
    """Latest known value for every telemetry key.

    Updates overwrite keys individually; keys missing from an update keep their
    previous value so slow-cadence families survive fast-cadence merges.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._fields: dict[str, str] = dict(initial or {})
        self._merge_count = 0

    def merge(self, fields: Mapping[str, str]) -> None:
        if not fields:
            return
        with self._lock:
            for key, value in fields.items():
                self._fields[key] = value
            self._merge_count += 1

    def read(self) -> Mapping[str, str]:
        """Return an immutable copy taken under the lock."""

        with self._lock:
            return MappingProxyType(dict(self._fields))

    def get(self, key: str, default: str | None = None) -> str | None:
        with self._lock:
            return self._fields.get(key, default)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._fields

    @property
    def merge_count(self) -> int:
        with self._lock:
            return self._merge_count

    def __len__(self) -> int:
        with self._lock:
            return len(self._fields)
