"""
Source emission for a finished CodeCatalog.

Each target renders two enumerations (Severity, Facility) with one variant
per distinct name, plus a total mapping from variant to its numeric value
written in hexadecimal. Optionally every error code is rendered as a constant
holding its packed 32-bit value, preceded by its message text as comments.

The emitter trusts the catalog: names are used verbatim as identifiers and
no value is re-validated here.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from mcgen.semantics.model import CodeCatalog, ErrorCode


def _hex(value: int) -> str:
    return f"0x{value:X}"


def _pairs(entries) -> List[Tuple[str, int]]:
    return [(name, entry.value) for name, entry in entries.items()]


def _comment_lines(prefix: str, lines: Iterable[str]) -> List[str]:
    return [f"{prefix} {line}".rstrip() for line in lines]


def _header(comment: str, source_name: Optional[str]) -> List[str]:
    origin = f" from {source_name}" if source_name else ""
    return [f"{comment} Generated by mcgen{origin}. Do not edit."]


#
# --- Python target
#

def _py_enum(enum_name: str, table_name: str, func_name: str, arg: str,
             pairs: List[Tuple[str, int]]) -> List[str]:
    out = ["", "", f"class {enum_name}(Enum):"]
    out += [f'    {name} = "{name}"' for name, _ in pairs]
    out += ["", "", f"{table_name}: dict[{enum_name}, int] = {{"]
    out += [f"    {enum_name}.{name}: {_hex(value)}," for name, value in pairs]
    out += ["}", "", "", f"def {func_name}({arg}: {enum_name}) -> int:",
            f"    return {table_name}[{arg}]"]
    return out


def _py_codes(codes: Iterable[ErrorCode]) -> List[str]:
    out: List[str] = []
    for code in codes:
        out.append("")
        out += _comment_lines("#", code.message)
        out.append(f"{code.symbolic_name} = {_hex(code.value)}")
    return out


def render_python(catalog: CodeCatalog, emit_codes: bool = False,
                  source_name: Optional[str] = None) -> str:
    out = _header("#", source_name)
    out.append("from enum import Enum")
    out += _py_enum("Severity", "SEVERITY_VALUES", "severity_value", "severity",
                    _pairs(catalog.severities))
    out += _py_enum("Facility", "FACILITY_VALUES", "facility_value", "facility",
                    _pairs(catalog.facilities))
    if emit_codes and catalog.error_codes:
        out.append("")
        out += _py_codes(catalog.error_codes)
    return "\n".join(out) + "\n"


#
# --- Rust target
#

def _rs_enum(enum_name: str, pairs: List[Tuple[str, int]]) -> List[str]:
    out = ["", "#[derive(Clone, Copy, Debug, PartialEq, Eq, Hash)]",
           f"pub enum {enum_name} {{"]
    out += [f"    {name}," for name, _ in pairs]
    out += ["}", "", f"impl {enum_name} {{",
            "    pub const fn value(self) -> u32 {",
            "        match self {"]
    out += [f"            {enum_name}::{name} => {_hex(value)}," for name, value in pairs]
    out += ["        }", "    }", "}"]
    return out


def render_rust(catalog: CodeCatalog, emit_codes: bool = False,
                source_name: Optional[str] = None) -> str:
    out = _header("//", source_name)
    out += _rs_enum("Severity", _pairs(catalog.severities))
    out += _rs_enum("Facility", _pairs(catalog.facilities))
    if emit_codes:
        for code in catalog.error_codes:
            out.append("")
            out += _comment_lines("///", code.message)
            out.append(f"pub const {code.symbolic_name}: u32 = {_hex(code.value)};")
    return "\n".join(out) + "\n"


Renderer = Callable[..., str]

TARGETS: Dict[str, Renderer] = {
    "python": render_python,
    "rust": render_rust,
}

EXTENSIONS: Dict[str, str] = {
    "python": ".py",
    "rust": ".rs",
}


def render(catalog: CodeCatalog, target: str = "python", emit_codes: bool = False,
           source_name: Optional[str] = None) -> str:
    """Render `catalog` as source text for `target`."""
    try:
        renderer = TARGETS[target]
    except KeyError:
        raise ValueError(f"unknown target '{target}' (expected one of: {', '.join(TARGETS)})") from None
    return renderer(catalog, emit_codes=emit_codes, source_name=source_name)
