"""
Value model for message-definition files.

A status code packs three fields into 32 bits:

    3 3 2 2 2 2 2 2 2 2 2 2 1 1 1 1 1 1 1 1 1 1
    1 0 9 8 7 6 5 4 3 2 1 0 9 8 7 6 5 4 3 2 1 0 9 8 7 6 5 4 3 2 1 0
   +---+-+-+-----------------------+-------------------------------+
   |Sev|C|R|     Facility          |               Code            |
   +---+-+-+-----------------------+-------------------------------+

Sev is one of the declared severities (00 success, 01 informational,
10 warning, 11 error for the built-ins), Facility identifies the component
and Code is the facility-local id. The customer (C) and reserved (R) bits are
never set by this tool.

CatalogBuilder accumulates declarations and records while the scanner walks
the file; build() freezes the result into a CodeCatalog.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from mcgen.semantics.exceptions import (
    InvalidErrorCode,
    MalformedDeclaration,
    UnknownName,
)

MAX_ID = 0xFFFF
MAX_SEVERITY = 0x3
MAX_FACILITY = 0xFFF

SEVERITY_SHIFT = 30
FACILITY_SHIFT = 16

BUILTIN_SEVERITIES: Tuple[Tuple[str, int], ...] = (
    ("Success", 0x0),
    ("Informational", 0x1),
    ("Warning", 0x2),
    ("Error", 0x3),
)

BUILTIN_FACILITIES: Tuple[Tuple[str, int], ...] = (
    ("System", 0xFF),
    ("Application", 0xFFF),
)

_HEX_RE = re.compile(r"0[xX][0-9a-fA-F]+")
_DEC_RE = re.compile(r"[0-9]+")


def parse_number(text: str) -> int:
    """Parse a decimal or 0x-prefixed hex literal. Raises ValueError otherwise."""
    text = text.strip()
    if _HEX_RE.fullmatch(text):
        return int(text, 16)
    if _DEC_RE.fullmatch(text):
        return int(text, 10)
    raise ValueError(f"not a number: {text!r}")


@dataclass(frozen=True)
class Severity:
    name: str
    value: int
    symbolic_name: str = ""


@dataclass(frozen=True)
class Facility:
    name: str
    value: int
    symbolic_name: str = ""


@dataclass(frozen=True)
class ErrorCode:
    id: int
    severity: int
    facility: int
    symbolic_name: str
    message: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.id > MAX_ID:
            raise InvalidErrorCode("id", self.id, MAX_ID, self.symbolic_name)
        if self.severity > MAX_SEVERITY:
            raise InvalidErrorCode("severity", self.severity, MAX_SEVERITY, self.symbolic_name)
        if self.facility > MAX_FACILITY:
            raise InvalidErrorCode("facility", self.facility, MAX_FACILITY, self.symbolic_name)

    @property
    def value(self) -> int:
        return (self.severity << SEVERITY_SHIFT) | (self.facility << FACILITY_SHIFT) | self.id

    def with_message(self, lines: Iterable[str]) -> 'ErrorCode':
        return replace(self, message=tuple(lines))

    @staticmethod
    def decompose(value: int) -> Tuple[int, int, int]:
        """Split a packed value into (severity, facility, id)."""
        return (
            (value >> SEVERITY_SHIFT) & MAX_SEVERITY,
            (value >> FACILITY_SHIFT) & MAX_FACILITY,
            value & MAX_ID,
        )


def _split_declaration(kind: str, text: str) -> Tuple[str, int, str]:
    """Split `Name=Value[:Symbolic]` into its three parts."""
    parts = text.split("=")
    if len(parts) != 2:
        raise MalformedDeclaration(kind, text)
    name = parts[0].strip()
    value_parts = parts[1].split(":")
    if not name or len(value_parts) > 2:
        raise MalformedDeclaration(kind, text)
    try:
        value = parse_number(value_parts[0])
    except ValueError:
        raise MalformedDeclaration(kind, text) from None
    symbolic = "".join(value_parts[1].split()) if len(value_parts) == 2 else ""
    return name, value, symbolic


class _CatalogLookups:
    """Read operations shared by the builder and the frozen catalog."""

    severities: Mapping[str, Severity]
    facilities: Mapping[str, Facility]

    def _severity_order(self) -> Tuple[str, ...]:
        raise NotImplementedError

    def _facility_order(self) -> Tuple[str, ...]:
        raise NotImplementedError

    def lookup_severity(self, name: str) -> int:
        try:
            return self.severities[name].value
        except KeyError:
            raise UnknownName("severity", name) from None

    def lookup_facility(self, name: str) -> int:
        try:
            return self.facilities[name].value
        except KeyError:
            raise UnknownName("facility", name) from None

    def default_severity_value(self) -> int:
        history = self._severity_order()
        if history:
            return self.severities[history[0]].value
        return self.severities["Success"].value

    def default_facility_value(self) -> int:
        # The second declared facility, not the first.
        history = self._facility_order()
        if len(history) >= 2:
            return self.facilities[history[1]].value
        return self.facilities["Application"].value


@dataclass(frozen=True)
class CodeCatalog(_CatalogLookups):
    severities: Mapping[str, Severity]
    facilities: Mapping[str, Facility]
    error_codes: Tuple[ErrorCode, ...]
    severity_history: Tuple[str, ...] = ()
    facility_history: Tuple[str, ...] = ()

    def _severity_order(self) -> Tuple[str, ...]:
        return self.severity_history

    def _facility_order(self) -> Tuple[str, ...]:
        return self.facility_history

    def find(self, symbolic_name: str) -> Optional[ErrorCode]:
        for code in self.error_codes:
            if code.symbolic_name == symbolic_name:
                return code
        return None


class CatalogBuilder(_CatalogLookups):
    def __init__(self) -> None:
        self.severities: dict[str, Severity] = {
            name: Severity(name, value) for name, value in BUILTIN_SEVERITIES
        }
        self.facilities: dict[str, Facility] = {
            name: Facility(name, value) for name, value in BUILTIN_FACILITIES
        }
        self.error_codes: List[ErrorCode] = []
        self._severity_history: List[str] = []
        self._facility_history: List[str] = []

    def _severity_order(self) -> Tuple[str, ...]:
        return tuple(self._severity_history)

    def _facility_order(self) -> Tuple[str, ...]:
        return tuple(self._facility_history)

    @property
    def severity_history(self) -> Tuple[str, ...]:
        return tuple(self._severity_history)

    @property
    def facility_history(self) -> Tuple[str, ...]:
        return tuple(self._facility_history)

    def add_severity(self, text: Optional[str]) -> Optional[Severity]:
        if not text:
            return None
        name, value, symbolic = _split_declaration("severity", text)
        severity = Severity(name, value, symbolic)
        self.severities[name] = severity
        self._severity_history.append(name)
        return severity

    def add_facility(self, text: Optional[str]) -> Optional[Facility]:
        if not text:
            return None
        name, value, symbolic = _split_declaration("facility", text)
        facility = Facility(name, value, symbolic)
        self.facilities[name] = facility
        self._facility_history.append(name)
        return facility

    def add_error_code(self, code: ErrorCode) -> None:
        self.error_codes.append(code)

    def build(self) -> CodeCatalog:
        return CodeCatalog(
            severities=MappingProxyType(dict(self.severities)),
            facilities=MappingProxyType(dict(self.facilities)),
            error_codes=tuple(self.error_codes),
            severity_history=tuple(self._severity_history),
            facility_history=tuple(self._facility_history),
        )
