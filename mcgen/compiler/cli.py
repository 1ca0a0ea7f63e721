"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

from mcgen.backend.emitter import EXTENSIONS, TARGETS


def warn_redeclarations(catalog, reporter) -> None:
    """Emit MCW002 for every severity/facility name declared more than once."""
    from mcgen.internals import errors as er

    for kind, history, table in (
        ("severity", catalog.severity_history, catalog.severities),
        ("facility", catalog.facility_history, catalog.facilities),
    ):
        for name, count in Counter(history).items():
            if count > 1:
                er.emit(reporter, er.ERR.MCW002, None,
                        kind=kind, name=name, value=table[name].value)


def resolve_output(src_path: Path, output: str, target: str, cwd: Path) -> Path | None:
    """None means stdout."""
    if output == "-":
        return None
    if output:
        out_path = Path(output)
        return out_path if out_path.is_absolute() else cwd / out_path
    return src_path.with_suffix(EXTENSIONS[target])


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    ap = argparse.ArgumentParser(prog="mcgen",
                                 description="Message-definition (.mc) compiler")

    ap.add_argument("source", nargs='?', help="Path to message file (.mc)")
    ap.add_argument("--version", action="store_true", help="Show version and exit")
    ap.add_argument("-o", "--out", metavar="OUT",
                    help="Output path, '-' for stdout (default: source filename with the target's extension)")
    ap.add_argument("--target", choices=sorted(TARGETS),
                    help="Output language (default: python, or [generate] target in mcgen.toml)")
    ap.add_argument("--force", action="store_true",
                    help="Overwrite the output file if it exists")
    ap.add_argument("--emit-codes", action="store_true",
                    help="Also emit one constant per error code")
    ap.add_argument("--dump-catalog", action="store_true",
                    help="Print the parsed catalog")
    ap.add_argument("--config", metavar="PATH",
                    help="Config file (default: mcgen.toml next to the source, if present)")
    ap.add_argument("-q", "--quiet", action="store_true", help="Do not print the banner")
    args = ap.parse_args(argv)

    if args.version:
        from mcgen import __version__
        print(__version__)
        return 0

    if not args.source:
        print("error: source file required", file=sys.stderr)
        return 2

    from mcgen.backend.emitter import render
    from mcgen.compiler.config import ConfigError, find_config, load_config
    from mcgen.compiler.loader import get_effective_cwd, read_source
    from mcgen.compiler.writer import OutputExistsError, write_output
    from mcgen.frontend.catalog_printer import dump_catalog
    from mcgen.internals import errors as er
    from mcgen.internals.parse_errors import handle_parse_exception
    from mcgen.internals.parser import parse
    from mcgen.internals.report import Reporter

    effective_cwd = get_effective_cwd()
    src_path = Path(args.source)
    if not src_path.is_absolute():
        src_path = effective_cwd / src_path
    src_path = src_path.resolve()

    reporter = Reporter(filename=str(src_path))

    try:
        src = read_source(src_path)
    except FileNotFoundError:
        er.emit(reporter, er.ERR.MC3001, None, path=src_path)
        reporter.print()
        return 2
    except (OSError, UnicodeDecodeError) as e:
        er.emit(reporter, er.ERR.MC3003, None, path=src_path, reason=e)
        reporter.print()
        return 2
    reporter.source = src

    config_path = Path(args.config) if args.config else find_config(src_path.parent)
    try:
        config = load_config(config_path).merged(
            target=args.target,
            overwrite=True if args.force else None,
            emit_codes=True if args.emit_codes else None,
            output=args.out,
        )
    except ConfigError as e:
        er.emit(reporter, er.ERR.MC3004, None, path=config_path or "<arguments>", reason=e)
        reporter.print()
        return 2

    # Generated source owns stdout when the output is "-"
    aside = sys.stderr if config.output == "-" else None
    if not args.quiet:
        from mcgen.internals.version import print_banner
        print_banner(aside)

    if src and not src.endswith('\n'):
        er.emit(reporter, er.ERR.MCW001, None)

    try:
        catalog = parse(src.splitlines())
    except Exception as exc:
        if handle_parse_exception(exc, reporter):
            reporter.print()
            return 2
        raise

    warn_redeclarations(catalog, reporter)

    if args.dump_catalog:
        print(dump_catalog(catalog), file=aside)
        print(file=aside)

    text = render(catalog, target=config.target, emit_codes=config.emit_codes,
                  source_name=src_path.name)
    out_path = resolve_output(src_path, config.output, config.target, effective_cwd)
    try:
        write_output(out_path, text, overwrite=config.overwrite)
    except OutputExistsError:
        er.emit(reporter, er.ERR.MC3002, None, path=out_path)

    reporter.print()
    return reporter.exit_code()


if __name__ == "__main__":
    raise SystemExit(main())
