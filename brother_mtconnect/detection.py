"""One-shot probes for the controller generation and unit system."""

from __future__ import annotations

import logging

from .loader import FileLoader
from .schema import ControlVersion, UnitSystem
from .decoders.common import iter_records, split_fields

logger = logging.getLogger(__name__)

# Probed in order; the first marker the controller serves wins.
VERSION_MARKERS: tuple[tuple[str, ControlVersion], ...] = (
    ("PRDD2", ControlVersion.D00),
    ("PRDC2", ControlVersion.C00),
)
UNSUPPORTED_MARKERS: tuple[tuple[str, str], ...] = (
    ("PRDB2", "B00"),
    ("PRDA2", "A00"),
)
UNIT_FILES = {
    ControlVersion.C00: "MSRRSC",
    ControlVersion.D00: "MSRRSD",
    ControlVersion.UNKNOWN: "MSRRSC",
}
UNIT_RECORD = "C01"


def detect_control_version(loader: FileLoader) -> ControlVersion:
    """Return the controller generation, defaulting to C00 with a warning."""

    for marker, version in VERSION_MARKERS:
        if loader.load(marker) is not None:
            logger.info("Detected control version %s (marker %s)", version.value, marker)
            return version

    for marker, label in UNSUPPORTED_MARKERS:
        if loader.load(marker) is not None:
            logger.warning("Controller reports unsupported generation %s (marker %s)", label, marker)
            break

    logger.warning(
        "Could not detect control version; falling back to C00 layouts. "
        "Decoded values may be wrong if the controller uses another layout."
    )
    return ControlVersion.C00


def parse_unit_record(lines: list[str] | None) -> UnitSystem:
    for line in iter_records(lines):
        fields = split_fields(line)
        if fields[0].upper() != UNIT_RECORD or len(fields) < 2:
            continue
        if fields[1] == "0":
            return UnitSystem.METRIC
        if fields[1] == "1":
            return UnitSystem.INCH
        break
    return UnitSystem.UNKNOWN


def detect_unit_system(loader: FileLoader, version: ControlVersion) -> UnitSystem:
    """Read the measurement settings file; unknown settings default to metric."""

    filename = UNIT_FILES.get(version, UNIT_FILES[ControlVersion.C00])
    units = parse_unit_record(loader.load(filename))
    if units is UnitSystem.UNKNOWN:
        logger.warning("Could not read unit system from %s; assuming Metric", filename)
        return UnitSystem.METRIC
    logger.info("Detected unit system %s", units.value)
    return units
