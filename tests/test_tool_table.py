from __future__ import annotations

from brother_mtconnect.decoders import decode_tool_table
from brother_mtconnect.schema import TOOL_TABLE_C00, TOOL_TABLE_D00, UnitSystem

C00_LINES = [
    "Y01,1,2",
    "T01,100.5000,0.0000,10.0000,0.0000,1,10000,9500,9952,'10 ENDMILL',"
    "0,0,0,0,0,0,0,0.0000,0.0000,0.0000,0.0000",
    "T02,85.2500,0.0000,,0.0000,0,5000,4500,,'6 DRILL'",
    "T100,1.0,0,1.0,0",
]


def test_decode_tool_table_metric_fields() -> None:
    result = decode_tool_table(C00_LINES, schema=TOOL_TABLE_C00, units=UnitSystem.METRIC)

    assert result["Tool 1 Length"] == "100.5000"
    assert result["Tool 1 Diameter"] == "10.0000"
    assert result["Tool 1 Group"] == "1"
    assert result["Tool 1 Life Limit"] == "10000"
    assert result["Tool 1 Life"] == "9952"
    assert result["Tool 1 Name"] == "10 ENDMILL"
    assert result["Tool 1 Rotation Feed"] == "0"
    assert result["Tool 1 Position X"] == "0.0000"
    assert result["Tool 1"] == "T01,LEN=100.5000,DIA=10.0000,GRP=1,NAME=10 ENDMILL"


def test_decode_tool_table_defaults_missing_values() -> None:
    result = decode_tool_table(C00_LINES, schema=TOOL_TABLE_C00)

    assert result["Tool 2 Diameter"] == "0"
    assert result["Tool 2 Life"] == "0"
    # Group comes from the Y record even though the inline field is 0.
    assert result["Tool 2 Group"] == "1"


def test_decode_tool_table_drops_out_of_range_tools() -> None:
    result = decode_tool_table(C00_LINES, schema=TOOL_TABLE_C00)

    assert not any(key.startswith("Tool 100") for key in result)
    assert result["Tool count"] == "2"
    assert result["Tool table"].split("|")[0].startswith("T01,")


def test_decode_tool_table_d00_keeps_three_digit_tools() -> None:
    lines = ["T100,50.0,0,8.0,0,3,100,0,40,'FACE MILL',120,300,0,800"]

    result = decode_tool_table(lines, schema=TOOL_TABLE_D00)

    assert result["Tool 100 Length"] == "50.0"
    assert result["Tool 100 Group"] == "3"
    assert result["Tool 100 Peripheral Speed"] == "120"
    assert result["Tool 100 Rotation Feed"] == "300"
    assert result["Tool 100 F Command"] == "800"
    assert result["Tool 100"].startswith("T100,")


def test_decode_tool_table_converts_inches() -> None:
    lines = ["T01,1.0,0.0,0.25,0.0,0,0,0,0,'DRILL'"]

    result = decode_tool_table(lines, schema=TOOL_TABLE_C00, units=UnitSystem.INCH)

    assert result["Tool 1 Length"] == "25.4"
    assert result["Tool 1 Diameter"] == "6.35"
    assert result["Tool 1 Length Wear"] == "0"


def test_decode_tool_table_is_repeatable() -> None:
    first = decode_tool_table(C00_LINES, schema=TOOL_TABLE_C00)
    second = decode_tool_table(list(C00_LINES), schema=TOOL_TABLE_C00)

    assert first == second


def test_decode_tool_table_empty() -> None:
    assert decode_tool_table([]) == {}
    assert decode_tool_table(["(comment only)"]) == {}
