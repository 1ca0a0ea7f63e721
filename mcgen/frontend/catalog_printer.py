from __future__ import annotations
from collections.abc import Mapping
from dataclasses import is_dataclass, fields
from typing import Any

from mcgen.semantics.model import ErrorCode

def _pp(node: Any, indent: int) -> str:
    ind = "  " * indent
    if isinstance(node, (list, tuple)) and node and is_dataclass(node[0]):
        return "\n".join(_pp(n, indent) for n in node)
    if isinstance(node, Mapping):
        return "\n".join(_pp(v, indent) for v in node.values())
    if not is_dataclass(node):
        return ind + repr(node)
    name = node.__class__.__name__
    if isinstance(node, ErrorCode):
        name = f"{name} {node.value:#010x}"
    lines = [f"{ind}{name}"]
    for f in fields(node):
        val = getattr(node, f.name)
        if isinstance(val, Mapping) or (isinstance(val, (list, tuple)) and val and is_dataclass(val[0])):
            lines.append(f"{ind}  {f.name}:")
            lines.append(_pp(val, indent + 2))
        else:
            lines.append(f"{ind}  {f.name}: {val!r}")
    return "\n".join(lines)

def dump_catalog(node: Any) -> str:
    return _pp(node, 0)
