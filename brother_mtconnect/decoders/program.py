"""Decoder for the ``MEM`` file (selected program)."""

from __future__ import annotations

from typing import Sequence

from .common import Telemetry, iter_records, split_fields


def decode_program(lines: Sequence[str] | None) -> Telemetry:
    for line in iter_records(lines):
        if line[:1].upper() != "O":
            continue
        name = split_fields(line)[0].upper()
        if name.endswith(".NC"):
            name = name[: -len(".NC")]
        if name:
            return {"Program name": name}
    return {}
