"""Shared parse exception handling for the CLI."""
from __future__ import annotations

from mcgen.semantics.exceptions import MessageCompileError


def handle_parse_exception(exc: Exception, reporter) -> bool:
    """Handle a parse exception by emitting diagnostics through the reporter.

    Returns:
        True if the exception was handled, False otherwise.
    """
    from mcgen.internals import errors as er

    if isinstance(exc, MessageCompileError):
        er.emit(reporter, er.ERR[exc.code], exc.span, **exc.params)
        return True

    return False
