# mcgen/internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from mcgen.internals.report import Span, Reporter


class DiagnosticSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL     = "general"
    HEADER      = "header"
    DECLARATION = "declaration"
    RECORD      = "record"
    IO          = "io"
    CONFIG      = "config"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: DiagnosticSeverity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = format_message(em.code, **kwargs)
    if em.severity == DiagnosticSeverity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def format_message(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

#
# --- Registry population
#

# Header blocks (MC1xxx)
_add(ErrorMessage("MC1001", DiagnosticSeverity.ERROR,
    "header block '{marker}' not found",
    Category.HEADER, "The SeverityNames/FacilityNames block is required and must appear in that order."))

_add(ErrorMessage("MC1002", DiagnosticSeverity.ERROR,
    "header block '{marker}' does not form complete Name=Value pairs: {text}",
    Category.HEADER, "After flattening the block, the token count was odd."))

_add(ErrorMessage("MC1003", DiagnosticSeverity.ERROR,
    "malformed {kind} declaration '{text}'",
    Category.DECLARATION, "Expected Name=Value or Name=Value:SymbolicName with a decimal or 0x value."))

# Error-code records (MC2xxx)
_add(ErrorMessage("MC2001", DiagnosticSeverity.ERROR,
    "unknown {kind} '{name}'",
    Category.RECORD, "The record names a severity/facility that no header block declared."))

_add(ErrorMessage("MC2002", DiagnosticSeverity.ERROR,
    "record '{name}' has no usable MessageId: {text}",
    Category.RECORD, "MessageId must be a number, empty (next id) or +N (relative to the previous id)."))

_add(ErrorMessage("MC2003", DiagnosticSeverity.ERROR,
    "{field} value {value:#x} of '{name}' exceeds its limit {limit:#x}",
    Category.RECORD, "id must fit 16 bits, severity 2 bits and facility 12 bits."))

# I/O and configuration (MC3xxx)
_add(ErrorMessage("MC3001", DiagnosticSeverity.ERROR,
    "source file not found: {path}",
    Category.IO))

_add(ErrorMessage("MC3002", DiagnosticSeverity.ERROR,
    "output file '{path}' already exists (use --force to overwrite)",
    Category.IO))

_add(ErrorMessage("MC3003", DiagnosticSeverity.ERROR,
    "cannot read {path}: {reason}",
    Category.IO))

_add(ErrorMessage("MC3004", DiagnosticSeverity.ERROR,
    "invalid configuration {path}: {reason}",
    Category.CONFIG))

# Warnings
_add(ErrorMessage("MCW001", DiagnosticSeverity.WARNING,
    "source does not end with a newline",
    Category.GENERAL))

_add(ErrorMessage("MCW002", DiagnosticSeverity.WARNING,
    "{kind} '{name}' redeclared; the later value {value:#x} wins",
    Category.DECLARATION))
