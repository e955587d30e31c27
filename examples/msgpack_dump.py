#!/usr/bin/env python3
"""Dump every MessagePack element of a file.

Prints one line per element (container headers included, followed by their
entries), or with --tree one line per fully decoded top-level value.

Usage:
    python examples/msgpack_dump.py data.msgpack
    python examples/msgpack_dump.py --tree data.msgpack
    python examples/msgpack_dump.py --format json broken.msgpack

Exit Codes:
    0   Whole file decoded
    1   Malformed input (diagnostic printed to stderr)
    2   File read error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from slicecomb.core import DepthLimitExceededError
from slicecomb.diagnostics import DiagnosticFormatter, OutputFormat
from slicecomb.formats.msgpack import (
    Element,
    ElementKind,
    MsgPackDecodeError,
    iter_elements,
    unpack_stream,
)


def describe(element: Element) -> str:
    """One-line description of an element."""
    match element.kind:
        case ElementKind.BIN:
            value = repr(bytes(element.value))
        case ElementKind.EXT:
            value = f"code={element.value.code} data={bytes(element.value.data)!r}"
        case ElementKind.ARRAY | ElementKind.MAP:
            value = f"({element.value} entries)"
        case _:
            value = repr(element.value)
    return f"{element.offset:#08x}  {element.kind:<5}  {value}"


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print the elements of a MessagePack file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", type=Path, help="MessagePack file to read")
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Decode whole top-level values instead of listing elements",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output format for malformed input",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        data = args.file.read_bytes()
    except OSError as e:
        print(f"[ERROR] Cannot read file: {e}", file=sys.stderr)
        return 2

    formatter = DiagnosticFormatter(output_format=OutputFormat(args.format))
    try:
        if args.tree:
            for value in unpack_stream(data):
                print(repr(value))
        else:
            for element in iter_elements(data):
                print(describe(element))
    except (MsgPackDecodeError, DepthLimitExceededError) as e:
        if e.diagnostic is not None:
            print(formatter.format(e.diagnostic), file=sys.stderr)
        else:
            print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
