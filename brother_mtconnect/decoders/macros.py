"""Decoder for the macro variable file (``MCRNI1`` / ``MCRNM1``)."""

from __future__ import annotations

import re
from typing import Iterator, Sequence

from ..schema import MACROS_C00, MacroSchema, UnitSystem
from ..schema.macros import COMMA
from .common import Telemetry, iter_records

EMPTY_VALUE = "0"

_MARKER = re.compile(r"(?<![A-Za-z0-9.])C(\d+)")
_LINE_RECORD = re.compile(r"^C(\d+)[\s,]*(.*)$")


def _first_token(text: str) -> str:
    for token in re.split(r"[\s,]+", text):
        if token:
            return token
    return ""


def _comma_records(records: Sequence[str]) -> Iterator[tuple[int, str]]:
    """Slice values between consecutive ``C###`` markers of the joined buffer."""

    buffer = ",".join(records)
    markers = list(_MARKER.finditer(buffer))
    for position, marker in enumerate(markers):
        end = markers[position + 1].start() if position + 1 < len(markers) else len(buffer)
        yield int(marker.group(1)), _first_token(buffer[marker.end() : end])


def _line_records(records: Sequence[str]) -> Iterator[tuple[int, str]]:
    for record in records:
        match = _LINE_RECORD.match(record)
        if match:
            yield int(match.group(1)), _first_token(match.group(2))


def decode_macros(
    lines: Sequence[str] | None,
    *,
    schema: MacroSchema = MACROS_C00,
    units: UnitSystem = UnitSystem.METRIC,
) -> Telemetry:
    """Decode common variables; empty values are reported as ``"0"``."""

    records = [line.upper() for line in iter_records(lines)]
    if not records:
        return {}

    parsed = _comma_records(records) if schema.delimiter == COMMA else _line_records(records)
    low, high = schema.value_range(units)

    result: Telemetry = {}
    for number, value in parsed:
        if not schema.is_valid_variable(number):
            continue
        if not value:
            result[f"Macro variable C{number}"] = EMPTY_VALUE
            continue
        try:
            numeric = float(value)
        except ValueError:
            continue
        if not low <= numeric <= high:
            continue
        result[f"Macro variable C{number}"] = value
    return result
