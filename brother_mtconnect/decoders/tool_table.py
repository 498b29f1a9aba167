"""Decoder for the tool table file (``TOLNI1`` / ``TOLNM1``)."""

from __future__ import annotations

from typing import Sequence

from ..schema import TOOL_TABLE_C00, ToolTableSchema, UnitSystem, to_millimeters
from .common import Telemetry, field_at, iter_records, join_records, parse_int, split_fields, unquote

DEFAULT_ZERO = "0"


def _group_map(records: Sequence[list[str]], schema: ToolTableSchema) -> dict[int, int]:
    """Tool number -> group number from ``Y##,tool,tool,...`` records."""

    groups: dict[int, int] = {}
    for fields in records:
        group = schema.group_number(fields[0])
        if group is None:
            continue
        for raw in fields[1 : schema.max_tools_per_group + 1]:
            tool = parse_int(raw)
            if tool is None or not schema.is_valid_tool(tool):
                continue
            groups.setdefault(tool, group)
    return groups


def decode_tool_table(
    lines: Sequence[str] | None,
    *,
    schema: ToolTableSchema = TOOL_TABLE_C00,
    units: UnitSystem = UnitSystem.METRIC,
) -> Telemetry:
    """Decode tool lengths, diameters, life and names.

    Linear fields are reported in millimetres; tools outside the schema's
    numbering range are dropped.
    """

    records = [split_fields(line) for line in iter_records(lines)]
    if not records:
        return {}
    groups = _group_map(records, schema)

    result: Telemetry = {}
    summaries: list[str] = []

    for fields in records:
        tool = schema.tool_number(fields[0])
        if tool is None or len(fields) < 2:
            continue
        prefix = f"Tool {tool}"
        summary = [schema.display_id(tool)]

        linear = {
            "Length": schema.length_field,
            "Length Wear": schema.length_wear_field,
            "Diameter": schema.diameter_field,
            "Diameter Wear": schema.diameter_wear_field,
            "Position X": schema.position_x_field,
            "Position Y": schema.position_y_field,
        }
        for label, index in linear.items():
            value = to_millimeters(field_at(fields, index), units)
            if value is None:
                if label == "Diameter":
                    result[f"{prefix} Diameter"] = DEFAULT_ZERO
                continue
            result[f"{prefix} {label}"] = value

        summary.append(f"LEN={result.get(f'{prefix} Length', DEFAULT_ZERO)}")
        summary.append(f"DIA={result[f'{prefix} Diameter']}")

        group = groups.get(tool)
        if group is None:
            fallback = parse_int(field_at(fields, schema.group_field))
            group = fallback if fallback else None
        if group is not None:
            result[f"{prefix} Group"] = str(group)
            summary.append(f"GRP={group}")

        life_limit = field_at(fields, schema.life_limit_field)
        if life_limit:
            result[f"{prefix} Life Limit"] = life_limit
        result[f"{prefix} Life"] = field_at(fields, schema.life_field) or DEFAULT_ZERO

        for label, index in (
            ("Peripheral Speed", schema.peripheral_speed_field),
            ("Rotation Feed", schema.rotation_feed_field),
            ("F Command", schema.f_command_field),
        ):
            value = field_at(fields, index)
            if value:
                result[f"{prefix} {label}"] = value

        name = unquote(field_at(fields, schema.name_field))
        if name:
            result[f"{prefix} Name"] = name
            summary.append(f"NAME={name}")

        result[prefix] = ",".join(summary)
        summaries.append(result[prefix])

    result["Tool count"] = str(len(summaries))
    result["Tool table"] = join_records(summaries)
    return result
