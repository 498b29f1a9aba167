"""Fixed MTConnect device model and the snapshot keys behind each data item."""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Callable, Mapping

SAMPLE = "SAMPLE"
EVENT = "EVENT"
CONDITION = "CONDITION"

UNAVAILABLE = "UNAVAILABLE"

Resolver = Callable[[Mapping[str, str]], str]


@dataclass(frozen=True, slots=True)
class DataItemSpec:
    id: str
    type: str
    category: str
    name: str | None = None
    sub_type: str | None = None
    units: str | None = None
    coordinate_system: str | None = None
    sources: tuple[str, ...] = ()
    default: str | None = None
    resolver: Resolver | None = field(default=None, compare=False)

    @property
    def fallback(self) -> str:
        if self.default is not None:
            return self.default
        return "0" if self.category == SAMPLE else ""

    def value(self, fields: Mapping[str, str]) -> str:
        """Current value from ``fields``, or the documented fallback."""

        if self.resolver is not None:
            return self.resolver(fields)
        for key in self.sources:
            value = fields.get(key)
            if value is not None and value != "":
                return value
        return self.fallback

    def probe_attributes(self) -> dict[str, str]:
        attrs = {"id": self.id, "type": self.type, "category": self.category}
        if self.name:
            attrs["name"] = self.name
        if self.sub_type:
            attrs["subType"] = self.sub_type
        if self.units:
            attrs["units"] = self.units
        if self.coordinate_system:
            attrs["coordinateSystem"] = self.coordinate_system
        return attrs


@dataclass(frozen=True, slots=True)
class ComponentSpec:
    type: str
    id: str
    name: str
    data_items: tuple[DataItemSpec, ...] = ()
    components: tuple["ComponentSpec", ...] = ()

    def walk(self):
        """Yield this component and every nested component, depth first."""

        yield self
        for child in self.components:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class DeviceSpec:
    id: str
    name: str
    data_items: tuple[DataItemSpec, ...]
    components: tuple[ComponentSpec, ...]

    def all_data_items(self) -> list[DataItemSpec]:
        items = list(self.data_items)
        for component in self.components:
            for nested in component.walk():
                items.extend(nested.data_items)
        return items


def element_name(data_item_type: str) -> str:
    """``PART_COUNT`` -> ``PartCount``."""

    return "".join(part.capitalize() for part in data_item_type.split("_"))


# ---------------------------------------------------------------------- #
# Resolvers
# ---------------------------------------------------------------------- #
CONTROLLER_MODES = {
    "MEMORY": "AUTOMATIC",
    "TAPE": "AUTOMATIC",
    "AUTOMATIC": "AUTOMATIC",
    "MDI": "MANUAL_DATA_INPUT",
    "EDIT": "EDIT",
    "MANUAL": "MANUAL",
    "HANDLE": "MANUAL",
    "ZERO RETURN": "MANUAL",
}
EXECUTION_STATES = {
    "READY",
    "ACTIVE",
    "INTERRUPTED",
    "FEED_HOLD",
    "STOPPED",
    "OPTIONAL_STOP",
    "PROGRAM_STOPPED",
    "PROGRAM_COMPLETED",
    "WAIT",
}


def availability(fields: Mapping[str, str]) -> str:
    return "AVAILABLE" if fields else UNAVAILABLE


def execution(fields: Mapping[str, str]) -> str:
    """Only reported when a decoded file carries an execution signal."""

    value = fields.get("Execution", "").strip().upper()
    return value if value in EXECUTION_STATES else UNAVAILABLE


def controller_mode(fields: Mapping[str, str]) -> str:
    value = fields.get("Operation mode", "").strip().upper()
    return CONTROLLER_MODES.get(value, UNAVAILABLE)


def alarm_count(fields: Mapping[str, str]) -> int:
    try:
        return int(fields.get("Alarm count", "0"))
    except ValueError:
        return 0


def first_alarm(field_name: str) -> Resolver:
    """Field of the first active alarm; empty once the alarm list is cleared."""

    def resolve(fields: Mapping[str, str]) -> str:
        if alarm_count(fields) < 1:
            return ""
        return fields.get(f"Alarm 0 {field_name}", "")

    return resolve


_CLOCK = re.compile(r"^(\d+):(\d{1,2})(?::(\d{1,2}))?$")


def seconds(key: str) -> Resolver:
    """Timer value in seconds; accepts plain numbers and ``h:mm[:ss]``."""

    def resolve(fields: Mapping[str, str]) -> str:
        raw = fields.get(key, "").strip()
        match = _CLOCK.match(raw)
        if match:
            hours, minutes, secs = (int(part or 0) for part in match.groups())
            return str(hours * 3600 + minutes * 60 + secs)
        try:
            float(raw)
        except ValueError:
            return "0"
        return raw

    return resolve


# ---------------------------------------------------------------------- #
# Device model
# ---------------------------------------------------------------------- #
WORK_OFFSETS = tuple(f"G{number}" for number in range(54, 60))
EXTENDED_OFFSETS = tuple(range(1, 11))
COUNTERS = tuple(range(1, 5))
ATC_POTS = tuple(range(1, 51))
MACRO_VARIABLES = tuple(range(500, 1000))


def _sample(id: str, type: str, *sources: str, **kwargs) -> DataItemSpec:
    return DataItemSpec(id=id, type=type, category=SAMPLE, sources=sources, **kwargs)


def _event(id: str, type: str, *sources: str, **kwargs) -> DataItemSpec:
    return DataItemSpec(id=id, type=type, category=EVENT, sources=sources, **kwargs)


def _axis(letter: str) -> ComponentSpec:
    lower = letter.lower()
    return ComponentSpec(
        type="Linear",
        id=lower,
        name=letter,
        data_items=(
            _sample(
                f"{letter}act",
                "POSITION",
                f"Machine coordinate position ({letter}-Axis)",
                name=f"{letter}act",
                sub_type="ACTUAL",
                units="MILLIMETER",
                coordinate_system="MACHINE",
            ),
            _sample(
                f"{letter}work",
                "POSITION",
                f"Workpiece coordinate position ({letter}-Axis)",
                name=f"{letter}work",
                sub_type="ACTUAL",
                units="MILLIMETER",
                coordinate_system="WORK",
            ),
        ),
    )


def _alarm_items() -> tuple[DataItemSpec, ...]:
    items = [
        _event(f"alarm_{field_name.lower()}", "MESSAGE", name=f"alarm_{field_name.lower()}",
               resolver=first_alarm(field_name))
        for field_name in ("Code", "Message", "Program", "Block", "Severity")
    ]
    items.append(_event("alarm_count", "MESSAGE", "Alarm count", name="alarm_count", default="0"))
    items.append(_event("alarms_table", "MESSAGE", "Alarms", name="alarms_table"))
    items.append(DataItemSpec(id="system", type="SYSTEM", category=CONDITION, name="system"))
    return tuple(items)


def _counter_items() -> tuple[DataItemSpec, ...]:
    items: list[DataItemSpec] = []
    for number in COUNTERS:
        items.extend(
            (
                _event(f"work_counter_{number}", "PART_COUNT", f"Counter {number}",
                       name=f"work_counter_{number}", sub_type="ALL", default="0"),
                _event(f"counter_{number}_target", "PART_COUNT", f"Counter {number} Target",
                       name=f"counter_{number}_target", sub_type="TARGET", default="0"),
                _event(f"counter_{number}_end_signal", "MESSAGE", f"Counter {number} End Signal",
                       name=f"counter_{number}_end_signal", default="0"),
                _event(f"counter_{number}_status", "MESSAGE", f"Counter {number} Status",
                       name=f"counter_{number}_status", default="normal"),
            )
        )
    return tuple(items)


def _timer_items() -> tuple[DataItemSpec, ...]:
    timers = (
        ("cycle_time", "Cycle time"),
        ("cutting_time", "Cutting time"),
        ("non_cutting_time", "Non cutting time"),
        ("operation_time", "Operation time"),
        ("power_on_time", "Power on time"),
    )
    return tuple(
        _sample(item_id, "ACCUMULATED_TIME", name=item_id, units="SECOND", resolver=seconds(key))
        for item_id, key in timers
    )


def _offset_items() -> tuple[DataItemSpec, ...]:
    items: list[DataItemSpec] = []
    for offset in WORK_OFFSETS:
        for axis in ("X", "Y", "Z"):
            item_id = f"work_offset_{offset.lower()}_{axis.lower()}"
            items.append(
                _sample(item_id, "POSITION", f"Work offset {offset} {axis}", name=item_id,
                        units="MILLIMETER", coordinate_system="WORK")
            )
        for axis in ("A", "B", "C"):
            item_id = f"work_offset_{offset.lower()}_{axis.lower()}"
            items.append(
                _sample(item_id, "ANGLE", f"Work offset {offset} {axis}", name=item_id, units="DEGREE")
            )
    for number in EXTENDED_OFFSETS:
        for axis in ("X", "Y", "Z"):
            item_id = f"extended_offset_x{number:02d}_{axis.lower()}"
            items.append(
                _sample(item_id, "POSITION", f"Extended offset X{number} {axis}", name=item_id,
                        units="MILLIMETER", coordinate_system="WORK")
            )
    return tuple(items)


def _magazine_items() -> tuple[DataItemSpec, ...]:
    items = [
        _event("tool_table", "MESSAGE", "Tool table", name="tool_table"),
        _event("tool_count", "MESSAGE", "Tool count", name="tool_count", default="0"),
        _event("atc_table", "MESSAGE", "ATC Tools", name="atc_table"),
        _event("atc_tool_count", "MESSAGE", "ATC Tool count", name="atc_tool_count", default="0"),
    ]
    items.extend(
        _event(f"atc_pot_{pot}_tool", "TOOL_NUMBER", f"ATC Pot {pot} Tool Number", name=f"atc_pot_{pot}_tool")
        for pot in ATC_POTS
    )
    return tuple(items)


def _macro_items() -> tuple[DataItemSpec, ...]:
    return tuple(
        _event(f"macro_c{number}", "VARIABLE", f"Macro variable C{number}", name=f"C{number}")
        for number in MACRO_VARIABLES
    )


def build_device(device_id: str = "brother-cnc", name: str = "Brother CNC Machine") -> DeviceSpec:
    path = ComponentSpec(
        type="Path",
        id="path",
        name="path",
        data_items=(
            _event("execution", "EXECUTION", name="execution", resolver=execution),
            _event("program", "PROGRAM", "Program name", name="program"),
            _event("tool_number", "TOOL_NUMBER", "ATC Spindle Tool Number", name="tool_number"),
            _sample("path_feedrate", "PATH_FEEDRATE", "Feedrate", name="path_feedrate",
                    sub_type="ACTUAL", units="MILLIMETER/SECOND"),
            _event("feedrate_override", "PATH_FEEDRATE_OVERRIDE", "Feedrate override",
                   name="feedrate_override", sub_type="PROGRAMMED"),
            _event("rapid_override", "PATH_FEEDRATE_OVERRIDE", "Rapid override",
                   name="rapid_override", sub_type="RAPID"),
        ),
    )
    controller = ComponentSpec(
        type="Controller",
        id="controller",
        name="controller",
        data_items=(
            _event("mode", "CONTROLLER_MODE", name="mode", resolver=controller_mode),
            *_alarm_items(),
            *_counter_items(),
            *_timer_items(),
            *_macro_items(),
        ),
        components=(path,),
    )
    axes = ComponentSpec(
        type="Axes",
        id="axes",
        name="base",
        components=(
            _axis("X"),
            _axis("Y"),
            _axis("Z"),
            ComponentSpec(
                type="Rotary",
                id="spindle",
                name="S",
                data_items=(
                    _sample("spindle_speed", "ROTARY_VELOCITY", "Spindle Speed", name="spindle_speed",
                            sub_type="ACTUAL", units="REVOLUTION/MINUTE"),
                    _sample("spindle_load", "LOAD", "Spindle load", name="spindle_load", units="PERCENT"),
                    _event("spindle_override", "ROTARY_VELOCITY_OVERRIDE", "Spindle override",
                           name="spindle_override"),
                ),
            ),
        ),
    )
    magazine = ComponentSpec(
        type="ToolMagazine",
        id="tool_magazine",
        name="atc",
        data_items=_magazine_items(),
    )
    offsets = ComponentSpec(
        type="Systems",
        id="work_offsets",
        name="work_offsets",
        data_items=_offset_items(),
    )
    return DeviceSpec(
        id=device_id,
        name=name,
        data_items=(_event("avail", "AVAILABILITY", name="avail", resolver=availability),),
        components=(controller, axes, magazine, offsets),
    )


DEVICE = build_device()
