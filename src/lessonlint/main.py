"""CLI entrypoint for curriculum validation."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from . import __version__
from .config import ConfigError, load_config
from .index_loader import IndexLoadError
from .report import format_json, format_text
from .validator import validate

PrintFn = Callable[[str], None]

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_FATAL = 2


def _print_error(message: str) -> None:
    print(message, file=sys.stderr)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lessonlint", description="Check a curriculum index and its lesson documents"
    )
    parser.add_argument("root", nargs="?", default=".", type=Path, help="curriculum root (default: .)")
    parser.add_argument("--index", help="index file relative to the root")
    parser.add_argument("--content-dir", help="lesson directory relative to the root")
    parser.add_argument("--config", type=Path, help="TOML settings file")
    parser.add_argument("--format", choices=["text", "json"], default="text")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(argv: list[str] | None = None, print_fn: PrintFn = print, error_fn: PrintFn = _print_error) -> int:
    """Run the CLI and return the process exit status."""
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.root, args.config)
    except ConfigError as exc:
        error_fn(f"ERROR: {exc}")
        return EXIT_FATAL
    if args.index:
        config = replace(config, index_file=args.index)
    if args.content_dir:
        config = replace(config, content_dir=args.content_dir)

    try:
        result = validate(args.root, config)
    except IndexLoadError as exc:
        error_fn(f"ERROR: Failed to load {config.index_file}")
        error_fn(str(exc))
        return EXIT_FATAL

    if args.format == "json":
        print_fn(format_json(result.lesson_count, result.sink))
    else:
        for line in format_text(result.lesson_count, result.sink):
            print_fn(line)
    return EXIT_OK if result.ok else EXIT_INVALID


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
