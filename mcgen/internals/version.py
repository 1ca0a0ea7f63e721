from __future__ import annotations
import sys, platform

from mcgen import __version__ as app_ver, __dev__ as is_dev

def _get_versions() -> dict[str, str]:
    lark_ver = "unknown"
    try:
        import lark
        lark_ver = getattr(lark, "__version__", "unknown")
    except ImportError:
        pass

    return {
        "app": app_ver,
        "python": platform.python_version(),
        "lark": lark_ver,
    }

def print_banner(stream=None) -> None:
    stream = stream or sys.stdout
    v = _get_versions()

    # Only style interactive terminals
    if getattr(stream, "isatty", lambda: False)():
        BOLD, DIM, RESET = "\x1b[1m", "\x1b[2m", "\x1b[0m"
    else:
        BOLD, DIM, RESET = "", "", ""

    dev_marker = " (dev)" if is_dev else ""
    print(
        f"{BOLD}mcgen message compiler{RESET} • {v['app']}{dev_marker}\n"
        f"{DIM}Python {v['python']} • lark {v['lark']}{RESET}\n",
        file=stream,
    )
