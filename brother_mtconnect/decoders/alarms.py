"""Decoder for the ``ALARM`` file."""

from __future__ import annotations

import re
from typing import Sequence

from .common import Telemetry, field_at, iter_records, join_records, split_fields

# Leading two digits of a raw alarm code select the alarm group.
ALARM_CATEGORIES: dict[str, str] = {
    "01": "NC",
    "02": "EX",
    "03": "SV",
    "04": "SP",
    "05": "IO",
    "06": "MC",
    "07": "SM",
    "08": "OT",
}

DEFAULT_SEVERITY = "error"
WINDOW = 6

_DECODED_CODE = re.compile(r"^[A-Z]{2}\d{4}$")
_RECORD_ID = re.compile(r"^[A-Z]\d{2,3}$")


def decode_alarm_code(raw: str) -> str | None:
    """Translate a numeric alarm code such as ``052039`` into ``IO2039``.

    Returns ``None`` for blank or zero codes, which mean "no alarm".
    """

    text = raw.strip().upper()
    if not text or text == "0":
        return None
    if _DECODED_CODE.match(text):
        return text
    digits = re.sub(r"\D", "", text)
    if not digits.strip("0"):
        return None

    if 4 <= len(digits) <= WINDOW:
        padded = digits.zfill(WINDOW)
        prefix = ALARM_CATEGORIES.get(padded[:2])
        if prefix:
            return prefix + padded[2:]
        if len(digits) == 4:
            return digits
    return _recover_code(digits)


def _recover_code(digits: str) -> str:
    """Best-effort decoding of codes with extra digits or an unknown group.

    Six digit windows are tried on digit-pair boundaries (both alignments when
    the length is odd); otherwise trailing zeros are dropped and the last four
    digits are used as a bare alarm number.
    """

    step = 1 if len(digits) % 2 else 2
    for start in range(0, len(digits) - WINDOW + 1, step):
        window = digits[start : start + WINDOW]
        prefix = ALARM_CATEGORIES.get(window[:2])
        if prefix:
            return prefix + window[2:]
    stripped = digits.rstrip("0") or digits
    return stripped[-4:].zfill(4)


def decode_alarms(lines: Sequence[str] | None) -> Telemetry:
    """Decode active alarms.

    Records are either ``E01,<code>,<message>,...`` or ``<code>,<message>,...``
    with optional program, block and severity fields after the message.
    ``Alarm count`` and ``Alarms`` are always present so a cleared alarm list
    replaces the previous one.
    """

    if not lines:
        return {}

    result: Telemetry = {}
    combined: list[str] = []
    index = 0

    for line in iter_records(lines, keep_digit_semicolons=True):
        fields = split_fields(line.strip(";").strip())
        if fields and _RECORD_ID.match(fields[0].upper()) and len(fields) >= 2:
            fields = fields[1:]
        code = decode_alarm_code(field_at(fields, 0))
        if code is None:
            continue

        message = field_at(fields, 1)
        program = field_at(fields, 2)
        block = field_at(fields, 3)
        severity = field_at(fields, 4) or DEFAULT_SEVERITY

        result[f"Alarm {index} Code"] = code
        result[f"Alarm {index} Message"] = message
        if program:
            result[f"Alarm {index} Program"] = program
        if block:
            result[f"Alarm {index} Block"] = block
        result[f"Alarm {index} Severity"] = severity
        combined.append(f"{code}:{message}")
        index += 1

    result["Alarm count"] = str(index)
    result["Alarms"] = join_records(combined)
    return result
