"""MTConnect device model, document rendering and HTTP surface."""

from .catalog import DEVICE, ComponentSpec, DataItemSpec, DeviceSpec, build_device, element_name
from .render import (
    DEVICES_NS,
    STREAMS_NS,
    HeaderInfo,
    machine_uuid,
    render_current,
    render_probe,
    render_sample,
)
from .server import create_app

__all__ = [
    "ComponentSpec",
    "DEVICE",
    "DEVICES_NS",
    "DataItemSpec",
    "DeviceSpec",
    "HeaderInfo",
    "STREAMS_NS",
    "build_device",
    "create_app",
    "element_name",
    "machine_uuid",
    "render_current",
    "render_probe",
    "render_sample",
]
