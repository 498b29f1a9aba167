from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from brother_mtconnect.decoders import decode_with_data_map
from brother_mtconnect.mapping import DataMap, DataMapLine, load_data_map

PDSP_LINES = [
    "L01,2,100,50,120",
    "L02,8000,35,1500",
    "L03,-12.500,40.000,-5.000",
    "L04,237.500,160.500,295.250",
]


def test_packaged_data_map_describes_production_data() -> None:
    data_map = load_data_map()

    assert data_map.file_name == "PDSP"
    assert [line.symbol for line in data_map.lines] == ["L01", "L02", "L03", "L04"]
    assert data_map.lines[0].items[1].name == "Operation mode"


def test_decode_with_packaged_data_map() -> None:
    result = decode_with_data_map(PDSP_LINES, load_data_map())

    assert result["Operation mode"] == "MDI"
    assert result["Feedrate override"] == "100"
    assert result["Rapid override"] == "50"
    assert result["Spindle override"] == "120"
    assert result["Spindle Speed"] == "8000"
    assert result["Feedrate"] == "1500"
    assert result["Machine coordinate position (X-Axis)"] == "-12.500"
    assert result["Workpiece coordinate position (Z-Axis)"] == "295.250"
    assert "Symbol" not in result


def test_decode_with_data_map_skips_symbol_mismatch_and_unknown_enum() -> None:
    lines = ["L01,9,100", "L99,1,2,3"]

    result = decode_with_data_map(lines, load_data_map())

    assert "Operation mode" not in result
    assert result["Feedrate override"] == "100"
    assert "Spindle Speed" not in result


def test_decode_with_data_map_without_input() -> None:
    assert decode_with_data_map([], load_data_map()) == {}
    assert decode_with_data_map(PDSP_LINES, None) == {}


def test_load_data_map_from_path(tmp_path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(
        json.dumps(
            {
                "fileName": "PDSP",
                "lines": [
                    {
                        "number": 0,
                        "symbol": "A",
                        "items": [{"name": "Symbol"}, {"name": "Speed"}],
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    data_map = load_data_map(path)

    assert isinstance(data_map, DataMap)
    assert decode_with_data_map(["A, 42 "], data_map) == {"Speed": "42"}


def test_data_map_line_rejects_negative_number() -> None:
    with pytest.raises(ValidationError):
        DataMapLine(number=-1, symbol="L01")


def test_only_number_and_enum_items_are_decoded(tmp_path) -> None:
    path = tmp_path / "typed.json"
    path.write_text(
        json.dumps(
            {
                "fileName": "PDSP",
                "lines": [
                    {
                        "number": 0,
                        "symbol": "A",
                        "items": [
                            {"name": "Symbol", "type": "String"},
                            {"name": "Label", "type": "String"},
                            {"name": "Speed", "type": "Number"},
                            {
                                "name": "Mode",
                                "type": "Enum",
                                "enumValues": [{"index": 1, "value": "ON"}],
                            },
                        ],
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    result = decode_with_data_map(["A,hello,42,1"], load_data_map(path))

    assert result == {"Speed": "42", "Mode": "ON"}
