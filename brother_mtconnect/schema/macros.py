"""Layout of the macro variable file (``MCRNI`` / ``MCRNM``)."""

from __future__ import annotations

from dataclasses import dataclass

from .versions import ControlVersion, UnitSystem, split_record_id

COMMA = "comma"
LINE = "line"


@dataclass(frozen=True, slots=True)
class MacroSchema:
    version: ControlVersion
    delimiter: str
    first_variable: int = 500
    last_variable: int = 999
    metric_range: tuple[float, float] = (-999999.999, 999999.999)
    inch_range: tuple[float, float] = (-99999.9999, 99999.9999)

    def filename(self, units: UnitSystem) -> str:
        return f"MCRN{units.file_suffix}1"

    def is_valid_variable(self, number: int) -> bool:
        return self.first_variable <= number <= self.last_variable

    def variable_number(self, raw_id: str) -> int | None:
        parts = split_record_id(raw_id)
        if parts is None or parts[0] != "C" or not self.is_valid_variable(parts[1]):
            return None
        return parts[1]

    def value_range(self, units: UnitSystem) -> tuple[float, float]:
        return self.inch_range if units is UnitSystem.INCH else self.metric_range


MACROS_C00 = MacroSchema(version=ControlVersion.C00, delimiter=COMMA)
MACROS_D00 = MacroSchema(version=ControlVersion.D00, delimiter=LINE)

MACRO_SCHEMAS: dict[ControlVersion, MacroSchema] = {
    ControlVersion.C00: MACROS_C00,
    ControlVersion.D00: MACROS_D00,
}
