"""Decoder for the work offset file (``POSNI1`` / ``POSNM1``)."""

from __future__ import annotations

from typing import Sequence

from ..schema import WORK_OFFSETS_C00, UnitSystem, WorkOffsetSchema, to_millimeters
from ..schema.work_offsets import LINEAR_AXES, ROTARY_AXES
from .common import Telemetry, field_at, iter_records, split_fields

MIN_FIELDS = 4


def decode_work_offsets(
    lines: Sequence[str] | None,
    *,
    schema: WorkOffsetSchema = WORK_OFFSETS_C00,
    units: UnitSystem = UnitSystem.METRIC,
) -> Telemetry:
    """Decode ``<id>,X,Y,Z[,A,B,C]`` offset records.

    X/Y/Z are converted to millimetres, rotary axes are kept as-is and omitted
    when blank. Records outside the schema's ranges are ignored.
    """

    result: Telemetry = {}
    for line in iter_records(lines):
        fields = split_fields(line)
        if len(fields) < MIN_FIELDS:
            continue
        resolved = schema.resolve(fields[0])
        if resolved is None:
            continue
        family, number = resolved
        prefix = f"{family.label} {family.prefix}{number}"

        for offset, axis in enumerate(LINEAR_AXES, start=1):
            value = to_millimeters(fields[offset], units)
            if value is not None:
                result[f"{prefix} {axis}"] = value
        for offset, axis in enumerate(ROTARY_AXES, start=len(LINEAR_AXES) + 1):
            value = field_at(fields, offset)
            if value:
                result[f"{prefix} {axis}"] = value
    return result
