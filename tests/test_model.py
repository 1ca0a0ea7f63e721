from __future__ import annotations

import dataclasses

import pytest

from mcgen.semantics.exceptions import InvalidErrorCode, MalformedDeclaration, UnknownName
from mcgen.semantics.model import CatalogBuilder, ErrorCode, parse_number


def test_parse_number() -> None:
    assert parse_number("0x1F") == 31
    assert parse_number(" 10 ") == 10
    assert parse_number("0X00ff") == 255
    for bad in ("", "1O", "-1", "0x", "ten"):
        with pytest.raises(ValueError):
            parse_number(bad)


def test_builtin_defaults() -> None:
    catalog = CatalogBuilder()
    assert catalog.lookup_severity("Success") == 0
    assert catalog.lookup_severity("Informational") == 1
    assert catalog.lookup_severity("Warning") == 2
    assert catalog.lookup_severity("Error") == 3
    assert catalog.lookup_facility("System") == 0xFF
    assert catalog.lookup_facility("Application") == 0xFFF
    assert catalog.severity_history == ()
    assert catalog.facility_history == ()


def test_add_severity_and_lookup() -> None:
    catalog = CatalogBuilder()
    sev = catalog.add_severity("Fatal=0x3")
    assert sev.name == "Fatal"
    assert sev.symbolic_name == ""
    assert catalog.lookup_severity("Fatal") == 3


def test_add_severity_with_symbolic_name() -> None:
    catalog = CatalogBuilder()
    sev = catalog.add_severity("Error=0x3:STATUS_SEVERITY_ERROR")
    assert sev.value == 3
    assert sev.symbolic_name == "STATUS_SEVERITY_ERROR"


def test_add_facility_strips_symbolic_whitespace() -> None:
    catalog = CatalogBuilder()
    fac = catalog.add_facility("Io=0x4:FACILITY IO")
    assert fac.value == 4
    assert fac.symbolic_name == "FACILITYIO"
    assert catalog.lookup_facility("Io") == 4


def test_redeclaration_overwrites_but_keeps_history() -> None:
    catalog = CatalogBuilder()
    catalog.add_facility("Net=0x10")
    catalog.add_facility("Disk=0x11")
    catalog.add_facility("Net=0x20")
    assert catalog.lookup_facility("Net") == 0x20
    assert catalog.facility_history == ("Net", "Disk", "Net")


def test_empty_declaration_is_noop() -> None:
    catalog = CatalogBuilder()
    assert catalog.add_severity("") is None
    assert catalog.add_facility(None) is None
    assert catalog.severity_history == ()
    assert catalog.facility_history == ()


@pytest.mark.parametrize("text", ["A=1=2", "A=1:B:C", "A=zz", "NoValue", "=1"])
def test_malformed_declaration(text: str) -> None:
    catalog = CatalogBuilder()
    with pytest.raises(MalformedDeclaration) as exc_info:
        catalog.add_facility(text)
    assert exc_info.value.text == text
    assert exc_info.value.code == "MC1003"


def test_unknown_name() -> None:
    catalog = CatalogBuilder()
    with pytest.raises(UnknownName) as exc_info:
        catalog.lookup_severity("Fatal")
    assert exc_info.value.kind == "severity"
    with pytest.raises(UnknownName):
        catalog.lookup_facility("Nowhere")


def test_default_values_use_first_severity_and_second_facility() -> None:
    catalog = CatalogBuilder()
    catalog.add_severity("A=1")
    catalog.add_severity("B=2")
    catalog.add_facility("X=0x10")
    catalog.add_facility("Y=0x20")
    catalog.add_facility("Z=0x30")
    assert catalog.default_severity_value() == 1
    assert catalog.default_facility_value() == 0x20


def test_default_facility_falls_back_with_single_declaration() -> None:
    catalog = CatalogBuilder()
    assert catalog.default_severity_value() == 0
    assert catalog.default_facility_value() == 0xFFF
    catalog.add_facility("X=0x10")
    assert catalog.default_facility_value() == 0xFFF


def test_error_code_value_packing() -> None:
    code = ErrorCode(id=0x45, severity=3, facility=0x123, symbolic_name="E")
    assert code.value == 0xC1230045
    assert code.value == (3 << 30) | (0x123 << 16) | 0x45
    assert ErrorCode.decompose(code.value) == (3, 0x123, 0x45)


def test_error_code_boundaries_are_accepted() -> None:
    code = ErrorCode(0xFFFF, 3, 0xFFF, "MAX")
    assert code.value == 0xCFFFFFFF
    assert ErrorCode.decompose(code.value) == (3, 0xFFF, 0xFFFF)


@pytest.mark.parametrize(
    "kwargs, field",
    [
        (dict(id=0x10000, severity=0, facility=0), "id"),
        (dict(id=0, severity=4, facility=0), "severity"),
        (dict(id=0, severity=0, facility=0x1000), "facility"),
    ],
)
def test_error_code_overflow(kwargs: dict, field: str) -> None:
    with pytest.raises(InvalidErrorCode) as exc_info:
        ErrorCode(symbolic_name="BIG", **kwargs)
    assert exc_info.value.field == field
    assert exc_info.value.code == "MC2003"


def test_error_code_is_immutable() -> None:
    code = ErrorCode(1, 0, 1, "E")
    with pytest.raises(dataclasses.FrozenInstanceError):
        code.id = 2
    with_msg = code.with_message(["hello"])
    assert with_msg.message == ("hello",)
    assert code.message == ()


def test_build_freezes_catalog() -> None:
    builder = CatalogBuilder()
    builder.add_severity("A=1")
    builder.add_error_code(ErrorCode(1, 1, 0xFFF, "E"))
    catalog = builder.build()

    builder.add_severity("A=2")
    builder.add_error_code(ErrorCode(2, 1, 0xFFF, "F"))

    assert catalog.lookup_severity("A") == 1
    assert len(catalog.error_codes) == 1
    assert catalog.find("E").id == 1
    assert catalog.find("F") is None
    assert catalog.severity_history == ("A",)
    with pytest.raises(TypeError):
        catalog.severities["B"] = None
