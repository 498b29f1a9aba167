"""Decoder for the ``WKCNTR`` file (workpiece counters)."""

from __future__ import annotations

from typing import Sequence

from .common import Telemetry, field_at, parse_int, split_fields

MAX_COUNTERS = 4


def decode_counters(lines: Sequence[str] | None) -> Telemetry:
    """Decode ``num,count,target,end_signal,status`` records.

    Only the first four lines carry counters; a missing or unparsable counter
    number falls back to the line position.
    """

    result: Telemetry = {}
    if not lines:
        return result

    for position, raw in enumerate(lines[:MAX_COUNTERS], start=1):
        line = (raw or "").strip()
        if not line:
            continue
        fields = split_fields(line)
        if len(fields) < 2:
            continue
        number = parse_int(fields[0]) or position

        count = parse_int(fields[1])
        if count is not None:
            result[f"Counter {number}"] = str(count)
        target = parse_int(field_at(fields, 2))
        if target is not None:
            result[f"Counter {number} Target"] = str(target)
        end_signal = parse_int(field_at(fields, 3))
        if end_signal is not None:
            result[f"Counter {number} End Signal"] = str(end_signal)
        status = field_at(fields, 4)
        if status:
            result[f"Counter {number} Status"] = status
    return result
