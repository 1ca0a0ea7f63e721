"""Line scanner that turns a message-definition file into a CodeCatalog.

The scan is a single forward pass over the already-loaded lines:

1. find the SeverityNames block and register each declaration,
2. find the FacilityNames block and register each declaration,
3. repeatedly read one error-code record until the input runs out.

A record is everything up to its `Language=` line (metadata), followed by
the message body up to a line holding a lone '.'. Records that carry no
SymbolicName are consumed and dropped.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from mcgen.internals.report import span_of_line
from mcgen.internals.tokenizer import clean_line, split_assignments
from mcgen.semantics.exceptions import MalformedBlock, MessageCompileError, HeaderNotFound, MissingMessageId
from mcgen.semantics.model import CatalogBuilder, CodeCatalog, ErrorCode, parse_number

SEVERITY_MARKER = "SeverityNames"
FACILITY_MARKER = "FacilityNames"
LANGUAGE_NAME = "English"
END_OF_MESSAGE = "."

# Source keyword for each ErrorCode bit field
_FIELD_KEYS = {"id": "MessageId", "severity": "Severity", "facility": "Facility"}

# `Language=` but not `LanguageNames=`
_LANGUAGE_RE = re.compile(r"\bLanguage\s*=")

# A field value is the whole run of non-space characters after '=', unless
# that run is itself the next `Key=`: `Severity= Facility=X` leaves Severity
# empty, while `MessageId=1.5` keeps `1.5` for the number parser to reject.
_RUN = r"[^\s=]+(?![^\s=]|\s*=)"
_VALUE = r"(?P<value>" + _RUN + r")?"
_SEVERITY_RE = re.compile(r"\bSeverity\s*=\s*" + _VALUE)
_FACILITY_RE = re.compile(r"\bFacility\s*=\s*" + _VALUE)
_SYMBOLIC_NAME_RE = re.compile(r"\bSymbolicName\s*=\s*" + _VALUE)
_MESSAGE_ID_RE = re.compile(r"\bMessageId\s*=\s*(?P<value>\+\s*" + _RUN + r"|" + _RUN + r")?")


def _field(pattern: re.Pattern, text: str) -> Optional[str]:
    m = pattern.search(text)
    if m is None:
        return None
    return m.group("value") or ""


@dataclass(frozen=True)
class RecordFields:
    """Fields pulled from a record's joined metadata text.

    None means the key is absent. For MessageId an empty string means the
    key is present without a value.
    """
    message_id: Optional[str]
    severity: Optional[str]
    facility: Optional[str]
    symbolic_name: Optional[str]

    @classmethod
    def extract(cls, text: str) -> 'RecordFields':
        return cls(
            message_id=_field(_MESSAGE_ID_RE, text),
            severity=_field(_SEVERITY_RE, text) or None,
            facility=_field(_FACILITY_RE, text) or None,
            symbolic_name=_field(_SYMBOLIC_NAME_RE, text) or None,
        )


@dataclass
class ParserState:
    """Values carried from one record to the next.

    Severity and facility inherit the most recently *stated* value, not the
    previous record's resolved one. Relative ids count per facility name and
    restart when the facility changes.
    """
    last_severity_value: int
    last_facility_value: int
    last_facility_name: str = ""
    last_used_facility_name: str = ""
    last_used_id: int = 0

    def resolve_severity(self, catalog: CatalogBuilder, name: Optional[str]) -> int:
        if name is not None:
            self.last_severity_value = catalog.lookup_severity(name)
        return self.last_severity_value

    def resolve_facility(self, catalog: CatalogBuilder, name: Optional[str]) -> int:
        if name is not None:
            self.last_facility_value = catalog.lookup_facility(name)
            self.last_facility_name = name
        return self.last_facility_value

    def facility_name_for(self, name: Optional[str]) -> str:
        return name if name is not None else self.last_facility_name

    def assign_id(self, id_text: str, facility_name: str, symbolic_name: str = "") -> int:
        """Resolve a MessageId value: absolute, empty (next) or +N (delta)."""
        text = id_text.strip()
        if text and not text.startswith("+"):
            try:
                return parse_number(text)
            except ValueError:
                raise MissingMessageId(symbolic_name, text) from None

        if facility_name != self.last_used_facility_name:
            self.last_used_id = 0
            self.last_used_facility_name = facility_name

        if not text:
            new_id = self.last_used_id + 1
        else:
            try:
                new_id = self.last_used_id + parse_number(text[1:])
            except ValueError:
                raise MissingMessageId(symbolic_name, text) from None
        self.last_used_id = new_id
        return new_id


@dataclass
class _PendingRecord:
    metadata: str
    first_message_line: str
    start: int
    marker: int


class MessageScanner:
    def __init__(self, lines: Sequence[str]) -> None:
        self.lines: List[str] = list(lines)
        self.pos = 0
        self.catalog = CatalogBuilder()

    def run(self) -> CodeCatalog:
        self._scan_header(SEVERITY_MARKER, self.catalog.add_severity)
        self._scan_header(FACILITY_MARKER, self.catalog.add_facility)
        self._scan_records()
        return self.catalog.build()

    # ----- helpers -----

    def _at_end(self) -> bool:
        return self.pos >= len(self.lines)

    def _attach(self, exc: MessageCompileError, index: int) -> MessageCompileError:
        if exc.span is None and 0 <= index < len(self.lines):
            exc.span = span_of_line(index, self.lines[index])
        return exc

    def _locate(self, start: int, end: int, needle: str) -> int:
        """First line in [start, end] holding `needle`, else `end` (the Language= line)."""
        for idx in range(start, end + 1):
            if needle in self.lines[idx]:
                return idx
        return end

    # ----- header blocks -----

    def _scan_header(self, marker: str, register: Callable[[str], object]) -> None:
        while not self._at_end() and marker not in clean_line(self.lines[self.pos]):
            self.pos += 1
        if self._at_end():
            raise HeaderNotFound(marker)

        start = self.pos
        line = clean_line(self.lines[start])
        text = line[line.index(marker) + len(marker):]
        idx = start
        while "(" not in text:
            idx += 1
            if idx >= len(self.lines):
                raise self._attach(MalformedBlock(line, marker), start)
            text = clean_line(self.lines[idx])
        text = text.split("(", 1)[1]

        content: List[str] = []
        while ")" not in text:
            content.append(text)
            idx += 1
            if idx >= len(self.lines):
                raise self._attach(MalformedBlock(" ".join(content).strip(), marker), start)
            text = clean_line(self.lines[idx])
        content.append(text.split(")", 1)[0])
        self.pos = idx + 1

        try:
            for pair in split_assignments(content, marker):
                register(pair)
        except MessageCompileError as exc:
            raise self._attach(exc, start)

    # ----- error-code records -----

    def _scan_records(self) -> None:
        state = ParserState(
            last_severity_value=self.catalog.default_severity_value(),
            last_facility_value=self.catalog.default_facility_value(),
        )
        while True:
            pending = self._read_metadata()
            if pending is None:
                return
            self._decode_record(state, pending)

    def _read_metadata(self) -> Optional[_PendingRecord]:
        parts: List[str] = []
        start = self.pos
        while not self._at_end():
            idx = self.pos
            line = clean_line(self.lines[idx])
            self.pos += 1
            if _LANGUAGE_RE.search(line):
                before, _, after = line.partition(LANGUAGE_NAME)
                parts.append(before)
                return _PendingRecord(" ".join(parts), after.strip(), start, idx)
            parts.append(line)
        return None

    def _decode_record(self, state: ParserState, pending: _PendingRecord) -> None:
        fields = RecordFields.extract(pending.metadata)
        if fields.symbolic_name is None:
            self._read_message_body("")
            return

        name = fields.symbolic_name
        span_start, span_end = pending.start, pending.marker
        try:
            if fields.message_id is None:
                raise MissingMessageId(name, pending.metadata.strip())
            facility_name = state.facility_name_for(fields.facility)
            message_id = state.assign_id(fields.message_id, facility_name, name)
        except MessageCompileError as exc:
            raise self._attach(exc, self._locate(span_start, span_end, "MessageId"))

        try:
            severity = state.resolve_severity(self.catalog, fields.severity)
        except MessageCompileError as exc:
            raise self._attach(exc, self._locate(span_start, span_end, "Severity"))
        try:
            facility = state.resolve_facility(self.catalog, fields.facility)
        except MessageCompileError as exc:
            raise self._attach(exc, self._locate(span_start, span_end, "Facility"))

        try:
            code = ErrorCode(message_id, severity, facility, name)
        except MessageCompileError as exc:
            needle = _FIELD_KEYS.get(exc.params.get("field"), "SymbolicName")
            raise self._attach(exc, self._locate(span_start, span_end, needle))

        message = self._read_message_body(pending.first_message_line)
        self.catalog.add_error_code(code.with_message(message))

    def _read_message_body(self, first_line: str) -> List[str]:
        """Consume lines up to and including the lone '.' terminator."""
        message = [first_line] if first_line else []
        while not self._at_end():
            line = self.lines[self.pos].rstrip("\r\n")
            self.pos += 1
            if line.strip() == END_OF_MESSAGE:
                break
            message.append(line)
        return message


def parse(lines: Sequence[str]) -> CodeCatalog:
    """Parse message-definition source lines into a frozen CodeCatalog."""
    return MessageScanner(lines).run()
