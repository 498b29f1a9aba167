"""Decoders turning controller file lines into telemetry key/value pairs."""

from .alarms import ALARM_CATEGORIES, decode_alarm_code, decode_alarms
from .atc import decode_atc
from .common import Telemetry, iter_records
from .counters import decode_counters
from .datamap import decode_with_data_map
from .macros import decode_macros
from .monitor import decode_monitor
from .panel import decode_panel
from .program import decode_program
from .tool_table import decode_tool_table
from .work_offsets import decode_work_offsets

__all__ = [
    "ALARM_CATEGORIES",
    "Telemetry",
    "decode_alarm_code",
    "decode_alarms",
    "decode_atc",
    "decode_counters",
    "decode_macros",
    "decode_monitor",
    "decode_panel",
    "decode_program",
    "decode_tool_table",
    "decode_with_data_map",
    "decode_work_offsets",
    "iter_records",
]
