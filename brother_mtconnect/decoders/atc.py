"""Decoder for the ATC control file (``ATCTL`` / ``ATCTLD``)."""

from __future__ import annotations

from typing import Mapping, Sequence

from ..schema import ATC_C00, AtcSchema
from .common import Telemetry, field_at, iter_records, join_records, parse_int, split_fields

DEFAULT_TYPE = "1"


def _tool_specs(tool: int, cross_reference: Mapping[str, str] | None) -> dict[str, str]:
    """Specs of ``tool`` as decoded from the tool table, defaulted when unknown."""

    known = cross_reference or {}
    prefix = f"Tool {tool}"
    return {
        "Tool Name": known.get(f"{prefix} Name", ""),
        "Length": known.get(f"{prefix} Length", "0"),
        "Diameter": known.get(f"{prefix} Diameter", "0"),
        "Group": known.get(f"{prefix} Group", ""),
        "Life": known.get(f"{prefix} Life", "0"),
    }


def decode_atc(
    lines: Sequence[str] | None,
    *,
    schema: AtcSchema = ATC_C00,
    cross_reference: Mapping[str, str] | None = None,
) -> Telemetry:
    """Decode magazine pots (``M##``) and, where supported, stockers (``R##``/``L##``).

    ``M01`` is the spindle; ``M02`` onwards map to pots 1..n. Tool specs come
    from ``cross_reference`` (normally the snapshot after the tool table has
    been merged), never from the ATC file itself.
    """

    records = list(iter_records(lines))
    if not records:
        return {}

    result: Telemetry = {}
    entries: list[str] = []

    for line in records:
        fields = split_fields(line)
        if len(fields) < 2:
            continue
        tool = parse_int(fields[1].lstrip("Tt"))
        if tool is None or not schema.is_valid_tool(tool):
            continue

        if schema.is_spindle(fields[0]):
            result["ATC Spindle Tool Number"] = str(tool)
            continue

        pot = schema.pot_number(fields[0])
        if pot is not None:
            prefix = f"ATC Pot {pot}"
        else:
            stocker = schema.stocker_id(fields[0])
            if stocker is None:
                continue
            prefix = f"ATC Stocker {stocker}"

        specs = _tool_specs(tool, cross_reference)
        tool_type = parse_int(field_at(fields, schema.type_field))
        type_text = str(tool_type) if tool_type is not None and schema.is_valid_type(tool_type) else DEFAULT_TYPE
        last_layout_field = schema.store_stocker_field or schema.type_field
        color = fields[-1] if len(fields) > last_layout_field + 1 else "0"

        result[f"{prefix} Tool Number"] = str(tool)
        for label, value in specs.items():
            result[f"{prefix} {label}"] = value
        result[f"{prefix} Type"] = type_text
        result[f"{prefix} Color"] = color

        if schema.store_stocker_field is not None:
            store = field_at(fields, schema.store_stocker_field)
            if store:
                result[f"{prefix} Store Stocker"] = store

        if pot is not None:
            entries.append(
                f"P{pot}:T{tool}:{specs['Tool Name']}:LEN={specs['Length']}:DIA={specs['Diameter']}"
                f":GRP={specs['Group']}:LIFE={specs['Life']}:TYPE={type_text}:COL={color}"
            )

    result["ATC Tool count"] = str(len(entries))
    result["ATC Tools"] = join_records(entries)
    return result
