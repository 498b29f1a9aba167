"""Controller generations and unit systems."""

from __future__ import annotations

from enum import Enum
import re

INCH_TO_MM = 25.4

_RECORD_ID = re.compile(r"^\s*([A-Za-z]+)\s*0*(\d+)\s*$")


class ControlVersion(Enum):
    C00 = "C00"
    D00 = "D00"
    UNKNOWN = "Unknown"


class UnitSystem(Enum):
    METRIC = "Metric"
    INCH = "Inch"
    UNKNOWN = "Unknown"

    @property
    def file_suffix(self) -> str:
        """Letter appended to unit dependent file names (``TOLNI`` / ``TOLNM``)."""

        return "I" if self is UnitSystem.INCH else "M"

    @property
    def needs_conversion(self) -> bool:
        return self is UnitSystem.INCH


def split_record_id(raw: str) -> tuple[str, int] | None:
    """Split ``"T001"`` into ``("T", 1)``; ``None`` when not a record id."""

    match = _RECORD_ID.match(raw)
    if not match:
        return None
    return match.group(1).upper(), int(match.group(2))


def normalize_record_id(raw: str) -> str | None:
    """Canonical form of a record id: ``T001`` and ``T01`` both become ``T1``."""

    parts = split_record_id(raw)
    if parts is None:
        return None
    prefix, number = parts
    return f"{prefix}{number}"


def format_number(value: float) -> str:
    """Six decimals with trailing zeros trimmed (``25.400000`` -> ``25.4``)."""

    text = f"{value:.6f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def to_millimeters(raw: str, units: UnitSystem) -> str | None:
    """Convert a linear value to millimetres; ``None`` when it is not numeric."""

    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if units.needs_conversion:
        return format_number(value * INCH_TO_MM)
    return text
