"""Response framing and the shared telemetry snapshot."""

from .frame import ResponseFrame, extract_payload, parse_response
from .snapshot import TelemetrySnapshot

__all__ = ["ResponseFrame", "TelemetrySnapshot", "extract_payload", "parse_response"]
