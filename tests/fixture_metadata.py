"""
Expectation metadata embedded in .mc fixture files.

Fixtures declare what the compiler should do with them in comment lines at
the top of the file:

    ; EXPECT_EXIT: 2
    ; EXPECT_CODE: MC2001

EXPECT_EXIT defaults to 0. EXPECT_CODE may repeat; each code must appear in
the diagnostics printed to stderr.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

FIXTURES_DIR = Path(__file__).parent / "fixtures"

_DIRECTIVE_RE = re.compile(r"^\s*;\s*(EXPECT_[A-Z_]+)\s*:\s*(.*?)\s*$")


@dataclass
class FixtureMetadata:
    expect_exit: int = 0
    expect_codes: List[str] = field(default_factory=list)


def parse_fixture_metadata(path: Path) -> FixtureMetadata:
    meta = FixtureMetadata()
    for line in path.read_text(encoding="utf-8").splitlines():
        m = _DIRECTIVE_RE.match(line)
        if not m:
            continue
        key, value = m.groups()
        if key == "EXPECT_EXIT":
            meta.expect_exit = int(value)
        elif key == "EXPECT_CODE":
            meta.expect_codes.append(value)
    return meta


def fixture_files() -> List[Path]:
    return sorted(FIXTURES_DIR.glob("*.mc"))
