"""Parse-time failures raised while building a CodeCatalog.

Every failure aborts the whole parse. Each exception carries the catalog
code it reports under, the format parameters for that message, and a span
pointing at the offending source line once the scanner knows it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from mcgen.internals.report import Span


class MessageCompileError(Exception):
    """Base class for all parse failures."""
    code = "MC0000"

    def __init__(self, span: Optional['Span'] = None, **params):
        from mcgen.internals.errors import format_message
        super().__init__(format_message(self.code, **params))
        self.params = params
        self.span = span


class HeaderNotFound(MessageCompileError):
    """Raised when a SeverityNames/FacilityNames block never appears."""
    code = "MC1001"

    def __init__(self, marker: str, span: Optional['Span'] = None):
        super().__init__(span, marker=marker)
        self.marker = marker


class MalformedBlock(MessageCompileError):
    """Raised when a header block does not split into complete key=value pairs."""
    code = "MC1002"

    def __init__(self, text: str, marker: str = "", span: Optional['Span'] = None):
        super().__init__(span, marker=marker, text=text)
        self.text = text


class MalformedDeclaration(MessageCompileError):
    code = "MC1003"

    def __init__(self, kind: str, text: str, span: Optional['Span'] = None):
        super().__init__(span, kind=kind, text=text)
        self.kind = kind
        self.text = text


class UnknownName(MessageCompileError):
    code = "MC2001"

    def __init__(self, kind: str, name: str, span: Optional['Span'] = None):
        super().__init__(span, kind=kind, name=name)
        self.kind = kind
        self.name = name


class MissingMessageId(MessageCompileError):
    code = "MC2002"

    def __init__(self, name: str, text: str, span: Optional['Span'] = None):
        super().__init__(span, name=name, text=text)
        self.name = name
        self.text = text


class InvalidErrorCode(MessageCompileError):
    """Raised when an id, severity or facility overflows its bit field."""
    code = "MC2003"

    def __init__(self, field: str, value: int, limit: int, name: str = "",
                 span: Optional['Span'] = None):
        super().__init__(span, field=field, value=value, limit=limit, name=name)
        self.field = field
        self.value = value
        self.limit = limit
