"""Writes generated source to its destination."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO


class OutputExistsError(FileExistsError):
    pass


def write_output(path: Optional[Path], text: str, overwrite: bool = False,
                 stream: Optional[TextIO] = None) -> None:
    """Write `text` to `path`, or to `stream` (default stdout) when path is None.

    Without `overwrite` an existing destination is left untouched and
    OutputExistsError is raised.
    """
    if path is None:
        (stream or sys.stdout).write(text)
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    mode = "w" if overwrite else "x"
    try:
        with open(path, mode, encoding="utf-8", newline="\n") as f:
            f.write(text)
    except FileExistsError:
        raise OutputExistsError(str(path)) from None
