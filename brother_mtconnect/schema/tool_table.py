"""Layout of the tool table file (``TOLNI`` / ``TOLNM``)."""

from __future__ import annotations

from dataclasses import dataclass

from .versions import ControlVersion, UnitSystem, split_record_id


@dataclass(frozen=True, slots=True)
class ToolTableSchema:
    version: ControlVersion
    id_width: int
    max_tool: int
    rotation_feed_field: int
    f_command_field: int
    position_x_field: int
    position_y_field: int
    peripheral_speed_field: int | None = None
    max_tools_per_group: int = 30
    length_field: int = 1
    length_wear_field: int = 2
    diameter_field: int = 3
    diameter_wear_field: int = 4
    group_field: int = 5
    life_limit_field: int = 6
    life_field: int = 8
    name_field: int = 9

    def filename(self, units: UnitSystem) -> str:
        return f"TOLN{units.file_suffix}1"

    def is_valid_tool(self, tool: int) -> bool:
        return 1 <= tool <= self.max_tool

    def tool_number(self, raw_id: str) -> int | None:
        """Tool number of a ``T##`` record, ``None`` when missing or out of range."""

        parts = split_record_id(raw_id)
        if parts is None or parts[0] != "T" or not self.is_valid_tool(parts[1]):
            return None
        return parts[1]

    def group_number(self, raw_id: str) -> int | None:
        parts = split_record_id(raw_id)
        if parts is None or parts[0] != "Y" or parts[1] < 1:
            return None
        return parts[1]

    def display_id(self, tool: int) -> str:
        """Controller spelling of a tool id (``T05`` or ``T005``)."""

        return f"T{tool:0{self.id_width}d}"


TOOL_TABLE_C00 = ToolTableSchema(
    version=ControlVersion.C00,
    id_width=2,
    max_tool=99,
    rotation_feed_field=10,
    f_command_field=12,
    position_x_field=17,
    position_y_field=19,
)

TOOL_TABLE_D00 = ToolTableSchema(
    version=ControlVersion.D00,
    id_width=3,
    max_tool=300,
    peripheral_speed_field=10,
    rotation_feed_field=11,
    f_command_field=13,
    position_x_field=18,
    position_y_field=20,
)

TOOL_TABLE_SCHEMAS: dict[ControlVersion, ToolTableSchema] = {
    ControlVersion.C00: TOOL_TABLE_C00,
    ControlVersion.D00: TOOL_TABLE_D00,
}
