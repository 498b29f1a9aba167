"""Decoder for the ``MONTR`` file (cycle and machine timers)."""

from __future__ import annotations

from typing import Sequence

from .common import Telemetry, iter_records, split_fields

TIMER_KEYS = (
    "Cycle time",
    "Cutting time",
    "Non cutting time",
    "Operation time",
    "Power on time",
)


def _split_pair(line: str) -> tuple[str, str] | None:
    separator = "=" if "=" in line else ":"
    key, found, value = line.partition(separator)
    if not found:
        return None
    key = key.strip()
    if not key:
        return None
    return key, value.strip()


def decode_monitor(lines: Sequence[str] | None) -> Telemetry:
    """Decode ``key=value`` / ``key:value`` pairs or one positional timer record.

    Comma separated records are positional even when the values are ``hh:mm:ss``.
    """

    result: Telemetry = {}
    for line in iter_records(lines):
        if "," in line and "=" not in line:
            for key, value in zip(TIMER_KEYS, split_fields(line)):
                if value:
                    result[key] = value
            continue
        pair = _split_pair(line)
        if pair:
            result[pair[0]] = pair[1]
    return result
