from __future__ import annotations

from brother_mtconnect.decoders import decode_atc, decode_tool_table
from brother_mtconnect.schema import ATC_C00, ATC_D00


def test_decode_atc_uses_tool_table_cross_reference() -> None:
    tools = decode_tool_table(["T05,120.0,0,0.5,0,2,100,0,80,'TAP'"])

    result = decode_atc(["M01,1,1,0", "M04,5,1,0,3"], schema=ATC_C00, cross_reference=tools)

    assert result["ATC Spindle Tool Number"] == "1"
    assert result["ATC Pot 3 Tool Number"] == "5"
    assert result["ATC Pot 3 Tool Name"] == "TAP"
    assert result["ATC Pot 3 Length"] == "120.0"
    assert result["ATC Pot 3 Diameter"] == "0.5"
    assert result["ATC Pot 3 Group"] == "2"
    assert result["ATC Pot 3 Life"] == "80"
    assert result["ATC Pot 3 Type"] == "1"
    assert result["ATC Pot 3 Color"] == "3"
    assert result["ATC Tool count"] == "1"
    assert result["ATC Tools"] == "P3:T5:TAP:LEN=120.0:DIA=0.5:GRP=2:LIFE=80:TYPE=1:COL=3"


def test_decode_atc_defaults_without_tool_table() -> None:
    result = decode_atc(["M02,1,9,0"], schema=ATC_C00)

    assert result["ATC Pot 1 Tool Name"] == ""
    assert result["ATC Pot 1 Length"] == "0"
    assert result["ATC Pot 1 Diameter"] == "0"
    assert result["ATC Pot 1 Type"] == "1"
    assert result["ATC Pot 1 Color"] == "0"


def test_decode_atc_skips_empty_and_invalid_tools() -> None:
    result = decode_atc(["M02,0,1,0", "M03,255,1,0", "M04,2,1,0"], schema=ATC_C00)

    assert "ATC Pot 1 Tool Number" not in result
    assert "ATC Pot 2 Tool Number" not in result
    assert result["ATC Pot 3 Tool Number"] == "2"
    assert result["ATC Tool count"] == "1"


def test_decode_atc_d00_stockers_and_extended_tools() -> None:
    lines = ["M02,201,2,R03", "R03,7,1,0", "L05,8,1,0"]

    result = decode_atc(lines, schema=ATC_D00)

    assert result["ATC Pot 1 Tool Number"] == "201"
    assert result["ATC Pot 1 Type"] == "2"
    assert result["ATC Pot 1 Store Stocker"] == "R03"
    assert result["ATC Pot 1 Color"] == "0"
    assert result["ATC Stocker R3 Tool Number"] == "7"
    assert result["ATC Stocker L5 Tool Number"] == "8"
    assert result["ATC Tool count"] == "1"


def test_decode_atc_c00_ignores_stockers() -> None:
    result = decode_atc(["R03,7,1,0"], schema=ATC_C00)

    assert result == {"ATC Tool count": "0", "ATC Tools": ""}


def test_decode_atc_empty_input() -> None:
    assert decode_atc([]) == {}
