"""Public package surface for the Brother CNC MTConnect gateway."""

from .configs import AgentConfig
from .loader import FileLoader
from .mtconnect import create_app, render_current, render_probe
from .poller import TelemetryPoller
from .schema import ControlVersion, UnitSystem
from .telemetry import TelemetrySnapshot, extract_payload
from .transport import BrotherRequestClient

__all__ = [
    "AgentConfig",
    "BrotherRequestClient",
    "ControlVersion",
    "FileLoader",
    "TelemetryPoller",
    "TelemetrySnapshot",
    "UnitSystem",
    "create_app",
    "extract_payload",
    "render_current",
    "render_probe",
]
