from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .base64_codec import Base64, parse_base64
from .cursor import Cursor
from .diagnostic import Diagnostic, describe
from .parser import Parser
from .sink import BytesSink

DATA_SENTINEL = "%"


class DataStep(Enum):
    SENTINEL = "sentinel"
    PAYLOAD = "payload"


@dataclass(frozen=True, slots=True)
class DataParser(Parser[bytes]):
    """Continuation of a `%`-prefixed base64 data literal.

    Once the sentinel is consumed, progress lives entirely in the wrapped
    base64 parser.
    """

    base64: Base64 = field(default_factory=Base64.standard)
    inner: Parser[bytes] | None = None
    step: DataStep = DataStep.SENTINEL

    def feed(self, cursor: Cursor) -> Parser[bytes]:
        return parse_data(cursor, self.base64, self.inner, self.step)


def parse_data(
    cursor: Cursor,
    base64: Base64 | None = None,
    inner: Parser[bytes] | None = None,
    step: DataStep = DataStep.SENTINEL,
) -> Parser[bytes]:
    if base64 is None:
        base64 = Base64.standard()

    if step is DataStep.SENTINEL:
        if cursor.is_cont():
            if cursor.head != DATA_SENTINEL:
                return Parser.error(Diagnostic.expected(describe(DATA_SENTINEL), cursor))
            cursor.step()
            step = DataStep.PAYLOAD
        elif cursor.is_done():
            return Parser.error(Diagnostic.expected(describe(DATA_SENTINEL), cursor))

    if step is DataStep.PAYLOAD:
        if inner is None:
            inner = parse_base64(cursor, base64, BytesSink())
        else:
            inner = inner.feed(cursor)
        if inner.is_done():
            return Parser.done(inner.bind())
        if inner.is_error():
            return Parser.error(inner.trap())

    if cursor.is_error():
        return Parser.error(Diagnostic.from_error(cursor))
    return DataParser(base64=base64, inner=inner, step=step)
