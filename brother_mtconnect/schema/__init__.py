"""Per-generation layouts of the controller files.

Each family keeps one configuration per :class:`ControlVersion`; supporting a
new controller generation means adding an entry to the family's registry.
"""

from __future__ import annotations

from typing import Mapping, TypeVar

from .atc import ATC_C00, ATC_D00, ATC_SCHEMAS, AtcSchema
from .macros import MACRO_SCHEMAS, MACROS_C00, MACROS_D00, MacroSchema
from .tool_table import TOOL_TABLE_C00, TOOL_TABLE_D00, TOOL_TABLE_SCHEMAS, ToolTableSchema
from .versions import (
    INCH_TO_MM,
    ControlVersion,
    UnitSystem,
    format_number,
    normalize_record_id,
    split_record_id,
    to_millimeters,
)
from .work_offsets import WORK_OFFSET_SCHEMAS, WORK_OFFSETS_C00, WORK_OFFSETS_D00, WorkOffsetSchema

SchemaT = TypeVar("SchemaT")

DEFAULT_VERSION = ControlVersion.C00

FAMILIES: dict[str, Mapping[ControlVersion, object]] = {
    "atc": ATC_SCHEMAS,
    "tool_table": TOOL_TABLE_SCHEMAS,
    "work_offsets": WORK_OFFSET_SCHEMAS,
    "macros": MACRO_SCHEMAS,
}


def _select(registry: Mapping[ControlVersion, SchemaT], version: ControlVersion) -> SchemaT:
    return registry.get(version, registry[DEFAULT_VERSION])


def get_config(family: str, version: ControlVersion):
    """Look up the configuration of ``family`` for ``version``.

    Unknown generations resolve to the C00 layout.
    """

    try:
        registry = FAMILIES[family]
    except KeyError as exc:
        raise KeyError(f"Unknown schema family '{family}'") from exc
    return _select(registry, version)


def get_atc_schema(version: ControlVersion) -> AtcSchema:
    return _select(ATC_SCHEMAS, version)


def get_tool_table_schema(version: ControlVersion) -> ToolTableSchema:
    return _select(TOOL_TABLE_SCHEMAS, version)


def get_work_offset_schema(version: ControlVersion) -> WorkOffsetSchema:
    return _select(WORK_OFFSET_SCHEMAS, version)


def get_macro_schema(version: ControlVersion) -> MacroSchema:
    return _select(MACRO_SCHEMAS, version)


__all__ = [
    "ATC_C00",
    "ATC_D00",
    "AtcSchema",
    "ControlVersion",
    "INCH_TO_MM",
    "MACROS_C00",
    "MACROS_D00",
    "MacroSchema",
    "TOOL_TABLE_C00",
    "TOOL_TABLE_D00",
    "ToolTableSchema",
    "UnitSystem",
    "WORK_OFFSETS_C00",
    "WORK_OFFSETS_D00",
    "WorkOffsetSchema",
    "format_number",
    "get_atc_schema",
    "get_config",
    "get_macro_schema",
    "get_tool_table_schema",
    "get_work_offset_schema",
    "normalize_record_id",
    "split_record_id",
    "to_millimeters",
]
