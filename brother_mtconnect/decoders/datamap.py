"""Generic decoder for files described by a DataMap (``PDSP``)."""

from __future__ import annotations

from typing import Sequence

from ..mapping import DataMap
from .common import Telemetry


def decode_with_data_map(lines: Sequence[str] | None, data_map: DataMap | None) -> Telemetry:
    """Map positional fields of the described lines to their item names.

    A line is only decoded when its first field equals the declared symbol.
    """

    result: Telemetry = {}
    if not lines or data_map is None:
        return result

    for spec in data_map.lines:
        if spec.number >= len(lines):
            continue
        fields = (lines[spec.number] or "").split(",")
        if fields[0].strip() != spec.symbol:
            continue
        for index in range(1, min(len(spec.items), len(fields))):
            item = spec.items[index]
            value = item.resolve(fields[index])
            if value is not None:
                result[item.name] = value
    return result
