from __future__ import annotations

from brother_mtconnect.decoders import decode_macros
from brother_mtconnect.schema import MACROS_C00, MACROS_D00, UnitSystem


def test_decode_macros_comma_buffer() -> None:
    result = decode_macros(["C500,1.000,C501,,C502,-3.250"], schema=MACROS_C00)

    assert result == {
        "Macro variable C500": "1.000",
        "Macro variable C501": "0",
        "Macro variable C502": "-3.250",
    }


def test_decode_macros_comma_records_span_lines() -> None:
    result = decode_macros(["C500,1.0,C501", ",2.5"], schema=MACROS_C00)

    assert result["Macro variable C500"] == "1.0"
    assert result["Macro variable C501"] == "2.5"


def test_decode_macros_line_records() -> None:
    result = decode_macros(["c500 1.5", "C501,", "C502 -2"], schema=MACROS_D00)

    assert result == {
        "Macro variable C500": "1.5",
        "Macro variable C501": "0",
        "Macro variable C502": "-2",
    }


def test_decode_macros_skips_invalid_values() -> None:
    lines = ["C499,1.0,C503,9999999,C504,ABC,C1000,1.0,C505,2"]

    result = decode_macros(lines, schema=MACROS_C00)

    assert result == {"Macro variable C505": "2"}


def test_decode_macros_inch_range_is_narrower() -> None:
    lines = ["C500,123456.0,C501,99999.0"]

    result = decode_macros(lines, schema=MACROS_C00, units=UnitSystem.INCH)

    assert result == {"Macro variable C501": "99999.0"}


def test_decode_macros_empty() -> None:
    assert decode_macros([]) == {}
