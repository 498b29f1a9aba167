"""Structured representation of a controller response."""

from __future__ import annotations

from dataclasses import dataclass, field

LINE_BREAK = "\r\n"
ABSENT_MARKERS = ("ERROR", "NOT FOUND")


@dataclass(slots=True)
class ResponseFrame:
    """Payload lines of one framed response plus the envelope around them."""

    lines: tuple[str, ...]
    command: str = ""
    checksum: str = ""
    framed: bool = True
    raw: str = field(default="", repr=False)

    @property
    def is_absent(self) -> bool:
        """True when the payload is empty or its first record is an error marker."""

        records = [line.strip() for line in self.lines if line.strip()]
        if not records:
            return True
        return records[0].upper() in ABSENT_MARKERS

    def as_list(self) -> list[str]:
        return list(self.lines)


def parse_response(raw: str) -> ResponseFrame:
    """Split ``%<command>\\r\\n<payload>\\r\\n<checksum>%\\r\\n`` into its parts."""

    start = raw.find(LINE_BREAK)
    end_marker = raw.rfind("%")
    payload_end = raw.rfind(LINE_BREAK, 0, end_marker) if end_marker >= 0 else -1

    if start < 0 or end_marker < 0 or payload_end < 0 or payload_end < start:
        return ResponseFrame(lines=tuple(raw.split(LINE_BREAK)), framed=False, raw=raw)

    command = raw[:start].lstrip("%")
    payload = raw[start + len(LINE_BREAK) : payload_end]
    checksum = raw[payload_end + len(LINE_BREAK) : end_marker]
    return ResponseFrame(
        lines=tuple(payload.split(LINE_BREAK)),
        command=command,
        checksum=checksum,
        raw=raw,
    )


def extract_payload(raw: str) -> list[str]:
    """Return the payload of a framed response split into lines."""

    return parse_response(raw).as_list()
