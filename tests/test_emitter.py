from __future__ import annotations

import pytest

from mcgen.backend.emitter import render
from mcgen.internals.parser import parse

SOURCE = """\
SeverityNames=(Ok=0x0 Fatal=0x3)
FacilityNames=(Net=0x10 Disk=0x1A)
MessageId=5
Severity=Fatal
Facility=Net
SymbolicName=NET_DOWN
Language=English
The network is down.
Check the cable.
.
"""


@pytest.fixture
def catalog():
    return parse(SOURCE.splitlines())


def test_python_enums_and_hex_tables(catalog) -> None:
    text = render(catalog, source_name="net.mc")
    assert text.startswith("# Generated by mcgen from net.mc. Do not edit.\n")
    assert "class Severity(Enum):" in text
    assert "class Facility(Enum):" in text
    assert "    Severity.Fatal: 0x3," in text
    assert "    Facility.Disk: 0x1A," in text
    assert "    Facility.Application: 0xFFF," in text
    assert "NET_DOWN" not in text


def test_python_variants_follow_declaration_order(catalog) -> None:
    text = render(catalog)
    order = [text.index(f'    {name} = "{name}"')
             for name in ("Success", "Informational", "Warning", "Error", "Ok", "Fatal")]
    assert order == sorted(order)


def test_python_output_is_importable(catalog) -> None:
    namespace: dict = {}
    exec(compile(render(catalog, emit_codes=True), "<generated>", "exec"), namespace)
    Severity, Facility = namespace["Severity"], namespace["Facility"]
    assert namespace["severity_value"](Severity.Fatal) == 3
    assert namespace["facility_value"](Facility.Net) == 0x10
    assert namespace["facility_value"](Facility.System) == 0xFF
    assert set(namespace["SEVERITY_VALUES"]) == set(Severity)
    assert namespace["NET_DOWN"] == 0xC0100005


def test_python_error_code_constants(catalog) -> None:
    text = render(catalog, emit_codes=True)
    assert "# The network is down.\n# Check the cable.\nNET_DOWN = 0xC0100005\n" in text


def test_rust_target(catalog) -> None:
    text = render(catalog, target="rust", emit_codes=True, source_name="net.mc")
    assert text.startswith("// Generated by mcgen from net.mc. Do not edit.\n")
    assert "pub enum Severity {" in text
    assert "            Severity::Fatal => 0x3," in text
    assert "            Facility::Disk => 0x1A," in text
    assert "/// The network is down.\n/// Check the cable.\npub const NET_DOWN: u32 = 0xC0100005;" in text


def test_unknown_target(catalog) -> None:
    with pytest.raises(ValueError):
        render(catalog, target="cobol")
