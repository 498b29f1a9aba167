from __future__ import annotations

from brother_mtconnect.decoders import decode_work_offsets
from brother_mtconnect.schema import WORK_OFFSETS_C00, WORK_OFFSETS_D00, UnitSystem


def test_decode_work_offsets_metric() -> None:
    lines = [
        "G54,-250.000,-120.500,-300.250,0.000",
        "G55,0.000,0.000,0.000",
        "X01,10.000,20.000,30.000",
    ]

    result = decode_work_offsets(lines, schema=WORK_OFFSETS_C00)

    assert result["Work offset G54 X"] == "-250.000"
    assert result["Work offset G54 Z"] == "-300.250"
    assert result["Work offset G54 A"] == "0.000"
    assert "Work offset G55 A" not in result
    assert result["Extended offset X1 Y"] == "20.000"


def test_decode_work_offsets_converts_linear_axes_only() -> None:
    lines = ["G54,1.0,2.0,-0.5,90.0"]

    result = decode_work_offsets(lines, schema=WORK_OFFSETS_C00, units=UnitSystem.INCH)

    assert result["Work offset G54 X"] == "25.4"
    assert result["Work offset G54 Y"] == "50.8"
    assert result["Work offset G54 Z"] == "-12.7"
    assert result["Work offset G54 A"] == "90.0"


def test_decode_work_offsets_skips_short_and_out_of_range_records() -> None:
    lines = ["G56,1.0,2.0", "X49,1,2,3", "G53,1,2,3", "(comment)"]

    assert decode_work_offsets(lines, schema=WORK_OFFSETS_C00) == {}


def test_decode_work_offsets_d00_ranges() -> None:
    lines = ["X300,1,2,3", "H999,4,5,6", "B008,0,0,0,45.0"]

    result = decode_work_offsets(lines, schema=WORK_OFFSETS_D00)

    assert result["Extended offset X300 X"] == "1"
    assert result["Fixture offset H999 Z"] == "6"
    assert result["Rotary offset B8 A"] == "45.0"
