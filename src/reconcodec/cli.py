from __future__ import annotations

import argparse
import json
import logging
import sys

from .api import DEFAULT_CHUNK_SIZE, parse_chunks, parse_file
from .base64_codec import Base64
from .data import DataParser
from .errors import ParseError
from .format import format_data, format_number
from .numeric import NumberParser, Uint32, Uint64
from .parser import Parser
from .render import RenderSettings

logger = logging.getLogger(__name__)


def _to_jsonable(value: object) -> object:
    if isinstance(value, bytes):
        return {"type": "data", "length": len(value), "base64": Base64.standard().encode(value)}
    if isinstance(value, (Uint32, Uint64)):
        return {"type": type(value).__name__.lower(), "value": int(value)}
    if isinstance(value, int):
        return {"type": "integer", "value": value}
    if isinstance(value, float):
        return {"type": "decimal", "value": value}
    raise TypeError(f"unexpected literal value: {type(value)!r}")


def _base64(args: argparse.Namespace) -> Base64:
    return Base64(url_safe=args.url_safe, padded=not args.unpadded)


def _make_parser(args: argparse.Namespace) -> Parser[object]:
    if args.kind == "number":
        return NumberParser(decimal=not args.integer_only, hexadecimal=not args.integer_only)
    return DataParser(base64=_base64(args))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="reconcodec", description="Parse Recon literals incrementally")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log parser driving at DEBUG level")
    ap.add_argument("--json", action="store_true", help="Print the parsed value as JSON")
    ap.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Characters fed to the parser per chunk",
    )
    ap.add_argument(
        "--context-lines",
        type=int,
        default=RenderSettings().context_lines,
        help="Lines kept around each end of an elided multi-line excerpt",
    )
    ap.add_argument("--id", default=None, help="Input name used in diagnostics (default: file path)")
    sub = ap.add_subparsers(dest="kind", required=True)

    num = sub.add_parser("number", help="Parse a number literal")
    num.add_argument("file", nargs="?", default="-", help="Input file, or - for stdin")
    num.add_argument("--integer-only", action="store_true", help="Reject fractions, exponents and hex")

    data = sub.add_parser("data", help="Parse a %%-prefixed base64 data literal")
    data.add_argument("file", nargs="?", default="-", help="Input file, or - for stdin")
    data.add_argument("--url-safe", action="store_true", help="Use the URL and filename safe alphabet")
    data.add_argument("--unpadded", action="store_true", help="Accept a trailing partial quantum")

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if args.chunk_size <= 0:
        ap.error("--chunk-size must be positive")
    if args.context_lines < 0:
        ap.error("--context-lines must be >= 0")

    parser = _make_parser(args)
    try:
        if args.file == "-":
            value = parse_chunks(
                parser,
                iter(lambda: sys.stdin.read(args.chunk_size), ""),
                id=args.id or "<stdin>",
            )
        else:
            value = parse_file(parser, args.file, chunk_size=args.chunk_size, id=args.id)
    except ParseError as e:
        settings = RenderSettings(context_lines=args.context_lines)
        print(e.diagnostic.render(settings=settings), file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("cannot read %s: %s", args.file, e)
        return 2

    if args.json:
        print(json.dumps(_to_jsonable(value), sort_keys=True))
    elif isinstance(value, bytes):
        print(format_data(value, base64=_base64(args)))
    else:
        print(format_number(value))
    return 0
