"""Line cleaning and header-block tokenizing.

Header blocks freely mix newlines, trailing colons and inconsistent spacing
around '=':

    SeverityNames=(Success=0x0:STATUS_SEVERITY_SUCCESS
                   Error  = 0x3 : STATUS_SEVERITY_ERROR
                  )

Tokenizing runs in two explicit stages so each can be exercised on its own:

1. clean_line() strips the trailing comment of each line; the joined text
   then has whitespace around ':' collapsed.
2. A lark lexer splits the text on runs of whitespace and '=', and the flat
   token list is re-paired into key=value strings.
"""
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List

from lark import Lark

from mcgen.semantics.exceptions import MalformedBlock

GRAMMAR_PATH = Path(__file__).with_name("assignments.lark")

_COLON_WS_RE = re.compile(r"\s*:\s*")


@lru_cache(maxsize=1)
def _assignment_lexer() -> Lark:
    return Lark.open(str(GRAMMAR_PATH), parser="lalr", lexer="basic")


def clean_line(raw: str) -> str:
    """Drop everything from the first unescaped ';' onward and trim."""
    escaped = False
    for idx, ch in enumerate(raw):
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == ";":
            return raw[:idx].strip()
    return raw.strip()


def normalize_colons(text: str) -> str:
    """Collapse any whitespace run touching a ':' so 'A = 1 : B' becomes 'A = 1:B'."""
    return _COLON_WS_RE.sub(":", text)


def tokenize_block(text: str) -> List[str]:
    """Flatten a block into its non-separator words."""
    tree = _assignment_lexer().parse(text)
    return [str(tok) for tok in tree.children]


def split_assignments(lines: Iterable[str], marker: str = "") -> List[str]:
    """Re-pair a multi-line header block into ['Name=Value[:Sym]', ...].

    Raises MalformedBlock if the flattened token count is odd.
    """
    text = normalize_colons(" ".join(lines))
    tokens = tokenize_block(text)
    if len(tokens) % 2:
        raise MalformedBlock(text.strip(), marker)
    return [f"{key}={value}" for key, value in zip(tokens[0::2], tokens[1::2])]
