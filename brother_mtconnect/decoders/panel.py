"""Decoder for the ``PANEL`` file (operator panel state)."""

from __future__ import annotations

from typing import Sequence

from .common import Telemetry, iter_records, split_fields


def decode_panel(lines: Sequence[str] | None) -> Telemetry:
    result: Telemetry = {}
    for line in iter_records(lines):
        if "," in line:
            for index, value in enumerate(split_fields(line)):
                if value:
                    result[f"Panel Field {index}"] = value
        elif "=" in line:
            parts = line.split("=")
            if len(parts) == 2 and parts[0].strip():
                result[parts[0].strip()] = parts[1].strip()
    return result
