"""Render the device model and a snapshot into MTConnect 2.5 documents."""

from __future__ import annotations

from dataclasses import dataclass
import uuid as uuid_module
import xml.etree.ElementTree as ET
from typing import Iterable, Mapping

from ..utils import utc_timestamp
from .catalog import CONDITION, DEVICE, EVENT, SAMPLE, ComponentSpec, DataItemSpec, DeviceSpec, element_name

MTCONNECT_VERSION = "2.5"
SCHEMA_VERSION = "2.5.0"
DEVICES_NS = f"urn:mtconnect.org:MTConnectDevices:{MTCONNECT_VERSION}"
STREAMS_NS = f"urn:mtconnect.org:MTConnectStreams:{MTCONNECT_VERSION}"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_BASE = "http://schemas.mtconnect.org/schemas"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

FALLBACK_UUID = "brother-cnc-agent"
GROUPS = ((SAMPLE, "Samples"), (EVENT, "Events"), (CONDITION, "Condition"))


@dataclass(slots=True)
class HeaderInfo:
    sender: str = "BrotherAdapter"
    instance_id: int = 1
    buffer_size: int = 131072


def machine_uuid() -> str:
    """Stable device uuid derived from the host MAC address."""

    node = uuid_module.getnode()
    # getnode() sets the multicast bit when it had to invent a random address.
    if (node >> 40) & 0x01:
        return FALLBACK_UUID
    return f"brother-cnc-{node:012x}"


def _root(tag: str, namespace: str, document: str) -> ET.Element:
    return ET.Element(
        tag,
        {
            "xmlns": namespace,
            "xmlns:xsi": XSI_NS,
            "xsi:schemaLocation": (
                f"{namespace} {SCHEMA_BASE}/{document}_{MTCONNECT_VERSION}.xsd"
            ),
        },
    )


def _header(root: ET.Element, header: HeaderInfo, timestamp: str, **extra: str) -> ET.Element:
    attrs = {
        "creationTime": timestamp,
        "sender": header.sender,
        "instanceId": str(header.instance_id),
        "version": SCHEMA_VERSION,
        "bufferSize": str(header.buffer_size),
    }
    attrs.update(extra)
    return ET.SubElement(root, "Header", attrs)


def _serialize(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


# ---------------------------------------------------------------------- #
# Probe
# ---------------------------------------------------------------------- #
def _add_data_items(parent: ET.Element, items: Iterable[DataItemSpec]) -> None:
    items = list(items)
    if not items:
        return
    container = ET.SubElement(parent, "DataItems")
    for item in items:
        ET.SubElement(container, "DataItem", item.probe_attributes())


def _add_components(parent: ET.Element, components: Iterable[ComponentSpec]) -> None:
    components = list(components)
    if not components:
        return
    container = ET.SubElement(parent, "Components")
    for component in components:
        element = ET.SubElement(container, component.type, {"id": component.id, "name": component.name})
        _add_data_items(element, component.data_items)
        _add_components(element, component.components)


def render_probe(
    device: DeviceSpec = DEVICE,
    *,
    device_uuid: str | None = None,
    header: HeaderInfo | None = None,
    timestamp: str | None = None,
) -> str:
    """``MTConnectDevices`` document describing the fixed device model."""

    timestamp = timestamp or utc_timestamp()
    root = _root("MTConnectDevices", DEVICES_NS, "MTConnectDevices")
    _header(
        root,
        header or HeaderInfo(),
        timestamp,
        assetBufferSize="0",
        assetCount="0",
        deviceModelChangeTime=timestamp,
    )
    devices = ET.SubElement(root, "Devices")
    element = ET.SubElement(
        devices,
        "Device",
        {"id": device.id, "name": device.name, "uuid": device_uuid or machine_uuid()},
    )
    _add_data_items(element, device.data_items)
    _add_components(element, device.components)
    return _serialize(root)


# ---------------------------------------------------------------------- #
# Current / sample
# ---------------------------------------------------------------------- #
def _condition(parent: ET.Element, item: DataItemSpec, fields: Mapping[str, str], attrs: dict[str, str]) -> None:
    attrs["type"] = item.type
    if not fields:
        ET.SubElement(parent, "Unavailable", attrs)
        return
    code = fields.get("Alarm 0 Code", "")
    try:
        active = int(fields.get("Alarm count", "0")) > 0
    except ValueError:
        active = False
    if not active:
        ET.SubElement(parent, "Normal", attrs)
        return
    attrs["nativeCode"] = code
    severity = fields.get("Alarm 0 Severity", "").lower()
    tag = "Warning" if severity == "warning" else "Fault"
    ET.SubElement(parent, tag, attrs).text = fields.get("Alarm 0 Message", "")


class _Sequence:
    def __init__(self) -> None:
        self.value = 0

    def next(self) -> str:
        self.value += 1
        return str(self.value)


def _component_stream(
    parent: ET.Element,
    *,
    component_type: str,
    component_id: str,
    name: str,
    items: tuple[DataItemSpec, ...],
    fields: Mapping[str, str],
    timestamp: str,
    sequence: _Sequence,
) -> None:
    if not items:
        return
    stream = ET.SubElement(
        parent,
        "ComponentStream",
        {"component": component_type, "componentId": component_id, "name": name},
    )
    for category, group_tag in GROUPS:
        members = [item for item in items if item.category == category]
        if not members:
            continue
        group = ET.SubElement(stream, group_tag)
        for item in members:
            attrs = {"dataItemId": item.id, "timestamp": timestamp, "sequence": sequence.next()}
            if item.name:
                attrs["name"] = item.name
            if item.sub_type:
                attrs["subType"] = item.sub_type
            if category == CONDITION:
                _condition(group, item, fields, attrs)
                continue
            ET.SubElement(group, element_name(item.type), attrs).text = item.value(fields)


def render_current(
    fields: Mapping[str, str],
    device: DeviceSpec = DEVICE,
    *,
    device_uuid: str | None = None,
    header: HeaderInfo | None = None,
    timestamp: str | None = None,
) -> str:
    """``MTConnectStreams`` document with the latest value of every data item."""

    timestamp = timestamp or utc_timestamp()
    root = _root("MTConnectStreams", STREAMS_NS, "MTConnectStreams")
    header_element = _header(root, header or HeaderInfo(), timestamp)
    streams = ET.SubElement(root, "Streams")
    device_stream = ET.SubElement(
        streams, "DeviceStream", {"name": device.name, "uuid": device_uuid or machine_uuid()}
    )

    sequence = _Sequence()
    _component_stream(
        device_stream,
        component_type="Device",
        component_id=device.id,
        name=device.name,
        items=device.data_items,
        fields=fields,
        timestamp=timestamp,
        sequence=sequence,
    )
    for top in device.components:
        for component in top.walk():
            _component_stream(
                device_stream,
                component_type=component.type,
                component_id=component.id,
                name=component.name,
                items=component.data_items,
                fields=fields,
                timestamp=timestamp,
                sequence=sequence,
            )

    header_element.set("firstSequence", "1")
    header_element.set("lastSequence", str(max(sequence.value, 1)))
    header_element.set("nextSequence", str(sequence.value + 1))
    return _serialize(root)


# No history is kept, so a sample request reports the current values.
render_sample = render_current
