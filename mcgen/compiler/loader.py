"""Source file loading."""
from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import List


def get_effective_cwd() -> Path:
    """Get the directory relative source paths are resolved against.

    Uses the MCGEN_CWD environment variable when set (wrapper scripts export
    it), otherwise os.getcwd().
    """
    mcgen_cwd = os.environ.get('MCGEN_CWD')
    if mcgen_cwd:
        return Path(mcgen_cwd)
    return Path.cwd()


def decode_source(data: bytes) -> str:
    """Decode raw message-file bytes.

    Message files are frequently saved as UTF-16 with a BOM; anything else is
    read as UTF-8 (an optional UTF-8 BOM is dropped).
    """
    if data.startswith(codecs.BOM_UTF16_LE):
        return data[len(codecs.BOM_UTF16_LE):].decode("utf-16-le")
    if data.startswith(codecs.BOM_UTF16_BE):
        return data[len(codecs.BOM_UTF16_BE):].decode("utf-16-be")
    return data.decode("utf-8-sig")


def read_source(path: Path) -> str:
    """Read a message file. Raises FileNotFoundError / UnicodeDecodeError."""
    if not path.is_file():
        raise FileNotFoundError(str(path))
    return decode_source(path.read_bytes())


def read_source_lines(path: Path) -> List[str]:
    return read_source(path).splitlines()
