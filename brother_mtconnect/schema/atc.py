"""Layout of the ATC control file (magazine pots and tool stockers)."""

from __future__ import annotations

from dataclasses import dataclass

from .versions import ControlVersion, split_record_id

SPINDLE_SLOT = 1
VALID_TOOL_TYPES = (1, 2, 3)


@dataclass(frozen=True, slots=True)
class AtcSchema:
    """Field layout and value ranges of ``ATCTL`` for one controller generation."""

    version: ControlVersion
    filename: str
    tool_cap: int
    max_pots: int = 50
    max_stocker_slot: int = 51
    base_tool_range: tuple[int, int] = (1, 99)
    extended_tool_range: tuple[int, int] | None = None
    has_stockers: bool = False
    tool_field: int = 1
    type_field: int = 2
    store_stocker_field: int | None = None
    allows_medium_diameter: bool = True

    def is_valid_tool(self, tool: int) -> bool:
        """``0`` and the cap value mean an empty slot."""

        if tool <= 0 or tool == self.tool_cap:
            return False
        low, high = self.base_tool_range
        if low <= tool <= high:
            return True
        if self.extended_tool_range is not None:
            low, high = self.extended_tool_range
            return low <= tool <= high
        return False

    def is_valid_type(self, tool_type: int) -> bool:
        if tool_type == 3 and not self.allows_medium_diameter:
            return False
        return tool_type in VALID_TOOL_TYPES

    def pot_number(self, raw_id: str) -> int | None:
        """Map ``M02``..``M51`` to pots 1..50; the spindle slot ``M01`` is not a pot."""

        parts = split_record_id(raw_id)
        if parts is None or parts[0] != "M":
            return None
        slot = parts[1]
        if slot <= SPINDLE_SLOT or slot - 1 > self.max_pots:
            return None
        return slot - 1

    def is_spindle(self, raw_id: str) -> bool:
        return split_record_id(raw_id) == ("M", SPINDLE_SLOT)

    def stocker_id(self, raw_id: str) -> str | None:
        """Canonical ``R3`` / ``L12`` for stocker records, ``None`` otherwise."""

        if not self.has_stockers:
            return None
        parts = split_record_id(raw_id)
        if parts is None or parts[0] not in ("R", "L"):
            return None
        side, number = parts
        if not 1 <= number <= self.max_stocker_slot:
            return None
        return f"{side}{number}"


ATC_C00 = AtcSchema(
    version=ControlVersion.C00,
    filename="ATCTL",
    tool_cap=255,
)

ATC_D00 = AtcSchema(
    version=ControlVersion.D00,
    filename="ATCTLD",
    tool_cap=999,
    extended_tool_range=(201, 299),
    has_stockers=True,
    store_stocker_field=3,
)

ATC_SCHEMAS: dict[ControlVersion, AtcSchema] = {
    ControlVersion.C00: ATC_C00,
    ControlVersion.D00: ATC_D00,
}
