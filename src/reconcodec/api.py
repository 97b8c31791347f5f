from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TypeVar

from .base64_codec import Base64
from .cursor import Cursor
from .data import DataParser
from .diagnostic import Diagnostic
from .errors import ParseError
from .numeric import NumberParser
from .parser import Parser
from .source import FileSource, LineSource, StreamSource, TextSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CHUNK_SIZE = 4096

_TRAILING_SPACE = " \t\r\n"


def parse_source(parser: Parser[T], src: str, *, id: str = "<memory>") -> T:
    """Run `parser` over a complete string."""
    cursor = Cursor.of(src, id=id, source=TextSource(src))
    return _finish(parser.feed(cursor), cursor, iter(()), None)


def parse_chunks(
    parser: Parser[T],
    chunks: Iterable[str],
    *,
    id: str = "<memory>",
    source: LineSource | None = None,
) -> T:
    """Feed `chunks` one at a time through `parser`'s continuations.

    When no `source` is given the chunks are buffered as they arrive so any
    diagnostic can be rendered later.
    """
    stream = StreamSource() if source is None else None
    cursor = Cursor.empty(id=id, source=source if source is not None else stream)
    it = iter(chunks)
    fed = 0

    while parser.is_cont():
        try:
            chunk = next(it, None)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("reading %s failed after %d chunk(s): %s", id, fed, exc)
            parser = parser.feed(cursor.fail(exc))
            break
        if chunk is None:
            cursor = cursor.resume(last=True)
            parser = parser.feed(cursor)
            break
        if stream is not None:
            stream.append(chunk)
        cursor = cursor.resume(chunk)
        parser = parser.feed(cursor)
        fed += 1

    logger.debug("fed %d chunk(s) of %s to parser", fed, id)
    return _finish(parser, cursor, it, stream)


def parse_file(
    parser: Parser[T],
    path: str | Path,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    encoding: str = "utf-8",
    id: str | None = None,
) -> T:
    """Stream a file through `parser`; diagnostics re-read the file to render."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    p = Path(path).expanduser().resolve()
    with p.open(encoding=encoding, newline="") as f:
        return parse_chunks(
            parser,
            iter(lambda: f.read(chunk_size), ""),
            id=id or str(p),
            source=FileSource(p, encoding=encoding),
        )


def parse_number(
    src: str,
    *,
    id: str = "<memory>",
    decimal: bool = True,
    hexadecimal: bool = True,
) -> int | float:
    return parse_source(NumberParser(decimal=decimal, hexadecimal=hexadecimal), src, id=id)


def parse_data(src: str, *, id: str = "<memory>", base64: Base64 | None = None) -> bytes:
    return parse_source(DataParser(base64=base64 or Base64.standard()), src, id=id)


def _finish(parser: Parser[T], cursor: Cursor, rest: Iterator[str], stream: StreamSource | None) -> T:
    if parser.is_error():
        diagnostic = parser.trap()
        logger.debug("parse of %s failed at %s", cursor.id, diagnostic.start.format(cursor.id))
        raise ParseError(diagnostic)
    if parser.is_cont():
        raise RuntimeError(f"parser did not finish at end of input: {parser!r}")
    value = parser.bind()
    _expect_end(cursor, rest, stream)
    return value


def _expect_end(cursor: Cursor, rest: Iterator[str], stream: StreamSource | None) -> None:
    # Only whitespace may follow a literal.
    while True:
        while cursor.is_cont() and cursor.head in _TRAILING_SPACE:
            cursor.step()
        if cursor.is_cont():
            raise ParseError(Diagnostic.unexpected(cursor))
        if cursor.is_done():
            return
        if cursor.is_error():
            raise ParseError(Diagnostic.from_error(cursor))
        try:
            chunk = next(rest, None)
        except (OSError, UnicodeDecodeError) as exc:
            cursor = cursor.fail(exc)
            continue
        if chunk is None:
            cursor = cursor.resume(last=True)
            continue
        if stream is not None:
            stream.append(chunk)
        cursor = cursor.resume(chunk)
