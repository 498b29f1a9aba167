"""Layout of the work offset file (``POSNI`` / ``POSNM``)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .versions import ControlVersion, UnitSystem, split_record_id

LINEAR_AXES = ("X", "Y", "Z")
ROTARY_AXES = ("A", "B", "C")


@dataclass(frozen=True, slots=True)
class OffsetFamily:
    prefix: str
    label: str
    low: int
    high: int

    def contains(self, number: int) -> bool:
        return self.low <= number <= self.high


@dataclass(frozen=True, slots=True)
class WorkOffsetSchema:
    version: ControlVersion
    families: tuple[OffsetFamily, ...] = field(default_factory=tuple)

    def filename(self, units: UnitSystem) -> str:
        return f"POSN{units.file_suffix}1"

    def resolve(self, raw_id: str) -> tuple[OffsetFamily, int] | None:
        """Family and index of an offset record, ``None`` when outside every range."""

        parts = split_record_id(raw_id)
        if parts is None:
            return None
        prefix, number = parts
        for family in self.families:
            if family.prefix == prefix and family.contains(number):
                return family, number
        return None


def _families(extended_high: int, fixture_high: int, rotary_high: int) -> tuple[OffsetFamily, ...]:
    return (
        OffsetFamily("G", "Work offset", 54, 59),
        OffsetFamily("X", "Extended offset", 1, extended_high),
        OffsetFamily("H", "Fixture offset", 1, fixture_high),
        OffsetFamily("B", "Rotary offset", 1, rotary_high),
    )


WORK_OFFSETS_C00 = WorkOffsetSchema(
    version=ControlVersion.C00,
    families=_families(extended_high=48, fixture_high=99, rotary_high=1),
)

WORK_OFFSETS_D00 = WorkOffsetSchema(
    version=ControlVersion.D00,
    families=_families(extended_high=300, fixture_high=999, rotary_high=8),
)

WORK_OFFSET_SCHEMAS: dict[ControlVersion, WorkOffsetSchema] = {
    ControlVersion.C00: WORK_OFFSETS_C00,
    ControlVersion.D00: WORK_OFFSETS_D00,
}
