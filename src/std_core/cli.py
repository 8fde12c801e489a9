"""``std-fmt`` command line: validate, reformat or inspect STD files."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO

from .codec import decode, encode
from .options import DEPTH_LIMIT_DEFAULT, DecodeOptions, EncodeOptions
from .scanner import tokenize
from .values import (
    Value,
    VBool,
    VCompound,
    VDecimal,
    VFloat,
    VFloatingPoint,
    VInteger,
    VList,
    VLong,
    VShort,
    VString,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Inspect helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a scalar with its variant name, e.g. ``VDecimal(-0.75d)``."""
    if isinstance(value, VString):
        return f'"{value.value}"'
    if isinstance(value, (VBool, VInteger, VFloatingPoint)):
        return f"{type(value).__name__}({value})"
    if isinstance(value, (VShort, VLong, VFloat, VDecimal)):
        return f"{type(value).__name__}({value.text()})"
    if isinstance(value, VCompound):
        return "{}" if not value.entries else f"VCompound({len(value.entries)})"
    if isinstance(value, VList):
        return "[]" if not value.items else f"VList({len(value.items)})"
    return repr(value)


def _fmt_inspect(value: Value, indent: int = 0) -> str:
    """Pretty-print a tree, one entry per line, keys in insertion order."""
    pad = "  " * (indent + 1)
    if isinstance(value, VCompound) and value.entries:
        width = max(len(k) for k in value.entries)
        lines = ["VCompound {"]
        for k, v in value.entries.items():
            lines.append(f"{pad}{k:<{width}} : {_fmt_inspect(v, indent + 1)}")
        lines.append("  " * indent + "}")
        return "\n".join(lines)

    if isinstance(value, VList) and value.items:
        lines = ["VList ["]
        for i, v in enumerate(value.items, 1):
            lines.append(f"{pad}{i}: {_fmt_inspect(v, indent + 1)}")
        lines.append("  " * indent + "]")
        return "\n".join(lines)

    return _fmt_inline(value)


def _dump_tokens(text: str, dest: IO[str]) -> None:
    for tok in tokenize(text):
        print(f"{tok.line}:{tok.column}\t{tok.type.name}\t{tok.value!r}", file=dest)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="std-fmt", description="Validate and reformat STD files")
    ap.add_argument("file", help="STD file to read ('-' for stdin)")
    ap.add_argument("-o", "--output", help="write the result here instead of stdout")
    ap.add_argument("--indent", type=int, default=None, help="multi-line layout with N spaces")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT)
    ap.add_argument("--no-duplicate-keys", action="store_true", help="reject repeated keys")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="validate only, print OK")
    mode.add_argument("--tokens", action="store_true", help="dump the token stream and exit")
    mode.add_argument("--inspect", action="store_true", help="print the typed value tree")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as fh:
        return fh.read()


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        data = _read_input(args.file)
    except OSError as exc:
        print(f"Error reading '{args.file}': {exc}", file=sys.stderr)
        return 2

    try:
        if args.tokens:
            _dump_tokens(data.decode("utf-8-sig"), sys.stdout)
            return 0

        options = DecodeOptions(
            max_depth=args.max_depth,
            allow_duplicate_keys=not args.no_duplicate_keys,
        )
        value = decode(data, options)

        if args.check:
            print("OK")
            return 0
        if args.inspect:
            out = _fmt_inspect(value) + "\n"
        else:
            out = encode(value, options=EncodeOptions(indent=args.indent)) + "\n"
    except ValueError as exc:  # STDCoreError, bad UTF-8, bad option values
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as fh:
                fh.write(out)
        except OSError as exc:
            print(f"Error writing '{args.output}': {exc}", file=sys.stderr)
            return 2
        logger.debug("wrote %s", args.output)
    else:
        sys.stdout.write(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
