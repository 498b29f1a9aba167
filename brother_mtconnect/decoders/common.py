"""Line filtering shared by the file decoders."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

Telemetry = dict[str, str]


def iter_records(lines: Iterable[str] | None, *, keep_digit_semicolons: bool = False) -> Iterator[str]:
    """Yield trimmed record lines, skipping blanks and ``(`` / ``;`` comments.

    With ``keep_digit_semicolons`` a line starting with ``;`` is kept when it
    contains a digit, since alarm files also use ``;`` as a record terminator.
    """

    if not lines:
        return
    for raw in lines:
        if raw is None:
            continue
        line = raw.strip()
        if not line or line.startswith("("):
            continue
        if line.startswith(";"):
            if not (keep_digit_semicolons and any(char.isdigit() for char in line)):
                continue
        yield line


def split_fields(line: str) -> list[str]:
    return [part.strip() for part in line.split(",")]


def field_at(fields: Sequence[str], index: int | None) -> str:
    """Field at ``index`` or an empty string when the record is too short."""

    if index is None or index >= len(fields):
        return ""
    return fields[index]


def unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1].strip()
    return value


def parse_int(value: str) -> int | None:
    try:
        return int(value.strip())
    except ValueError:
        return None


def join_records(records: Iterable[str]) -> str:
    return "|".join(records)
