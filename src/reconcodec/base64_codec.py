from __future__ import annotations

import base64 as _stdlib_base64
from dataclasses import dataclass
from enum import Enum

from .cursor import Cursor
from .diagnostic import Diagnostic, describe
from .parser import Parser
from .sink import BytesSink, Sink

STANDARD_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


@dataclass(frozen=True, slots=True)
class Base64:
    """A base64 alphabet plus its padding rule."""

    url_safe: bool = False
    padded: bool = True

    @classmethod
    def standard(cls, padded: bool = True) -> Base64:
        return cls(url_safe=False, padded=padded)

    @classmethod
    def url(cls, padded: bool = True) -> Base64:
        return cls(url_safe=True, padded=padded)

    @property
    def alphabet(self) -> str:
        return URL_ALPHABET if self.url_safe else STANDARD_ALPHABET

    def is_digit(self, c: str) -> bool:
        if "0" <= c <= "9" or "A" <= c <= "Z" or "a" <= c <= "z":
            return True
        if self.url_safe:
            return c == "-" or c == "_"
        return c == "+" or c == "/"

    def decode_digit(self, c: str) -> int:
        if "A" <= c <= "Z":
            return ord(c) - ord("A")
        if "a" <= c <= "z":
            return ord(c) - ord("a") + 26
        if "0" <= c <= "9":
            return ord(c) - ord("0") + 52
        if c == "+" or c == "-":
            return 62
        if c == "/" or c == "_":
            return 63
        raise ValueError(f"invalid base64 digit: {describe(c)}")

    def write_quantum(self, sink: Sink[bytes], c1: str, c2: str, c3: str, c4: str) -> None:
        """Decode one group of four digits, `=` standing in for padding."""
        x = self.decode_digit(c1)
        y = self.decode_digit(c2)
        if c3 != "=":
            z = self.decode_digit(c3)
            sink.write(((x << 2) | (y >> 4)) & 0xFF)
            sink.write(((y << 4) | (z >> 2)) & 0xFF)
            if c4 != "=":
                w = self.decode_digit(c4)
                sink.write(((z << 6) | w) & 0xFF)
        elif c4 == "=":
            sink.write(((x << 2) | (y >> 4)) & 0xFF)
        else:
            raise ValueError("improperly padded base64")

    def encode(self, data: bytes) -> str:
        if self.url_safe:
            out = _stdlib_base64.urlsafe_b64encode(data).decode("ascii")
        else:
            out = _stdlib_base64.b64encode(data).decode("ascii")
        return out if self.padded else out.rstrip("=")

    def parser(self) -> Base64Parser:
        return Base64Parser(base64=self, sink=BytesSink())


class Base64Step(Enum):
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    PADDING = 5


@dataclass(frozen=True, slots=True)
class Base64Parser(Parser[bytes]):
    """Continuation of a base64 digit run.

    `p`, `q` and `r` hold the digits of the quantum in progress.
    """

    base64: Base64
    sink: BytesSink
    p: str = ""
    q: str = ""
    r: str = ""
    step: Base64Step = Base64Step.FIRST

    def feed(self, cursor: Cursor) -> Parser[bytes]:
        return parse_base64(cursor, self.base64, self.sink.clone(), self.p, self.q, self.r, self.step)


def parse_base64(
    cursor: Cursor,
    base64: Base64,
    sink: BytesSink,
    p: str = "",
    q: str = "",
    r: str = "",
    step: Base64Step = Base64Step.FIRST,
) -> Parser[bytes]:
    while True:
        if step is Base64Step.FIRST:
            if cursor.is_cont():
                c = cursor.head
                if not base64.is_digit(c):
                    return Parser.done(sink.bind())
                cursor.step()
                p = c
                step = Base64Step.SECOND
            elif cursor.is_done():
                return Parser.done(sink.bind())

        if step is Base64Step.SECOND:
            if cursor.is_cont():
                c = cursor.head
                if not base64.is_digit(c):
                    return Parser.error(Diagnostic.expected("base64 digit", cursor))
                cursor.step()
                q = c
                step = Base64Step.THIRD
            elif cursor.is_done():
                return Parser.error(Diagnostic.expected("base64 digit", cursor))

        if step is Base64Step.THIRD:
            if cursor.is_cont():
                c = cursor.head
                if base64.is_digit(c):
                    cursor.step()
                    r = c
                    step = Base64Step.FOURTH
                elif c == "=":
                    cursor.step()
                    r = c
                    step = Base64Step.PADDING
                elif not base64.padded:
                    base64.write_quantum(sink, p, q, "=", "=")
                    return Parser.done(sink.bind())
                else:
                    return Parser.error(Diagnostic.expected("base64 digit", cursor))
            elif cursor.is_done():
                if not base64.padded:
                    base64.write_quantum(sink, p, q, "=", "=")
                    return Parser.done(sink.bind())
                return Parser.error(Diagnostic.expected("base64 digit", cursor))

        if step is Base64Step.FOURTH:
            if cursor.is_cont():
                c = cursor.head
                if base64.is_digit(c):
                    cursor.step()
                    base64.write_quantum(sink, p, q, r, c)
                    p = q = r = ""
                    step = Base64Step.FIRST
                    continue
                if c == "=":
                    cursor.step()
                    base64.write_quantum(sink, p, q, r, "=")
                    return Parser.done(sink.bind())
                if not base64.padded:
                    base64.write_quantum(sink, p, q, r, "=")
                    return Parser.done(sink.bind())
                return Parser.error(Diagnostic.expected("base64 digit", cursor))
            elif cursor.is_done():
                if not base64.padded:
                    base64.write_quantum(sink, p, q, r, "=")
                    return Parser.done(sink.bind())
                return Parser.error(Diagnostic.expected("base64 digit", cursor))
        elif step is Base64Step.PADDING:
            if cursor.is_cont():
                c = cursor.head
                if c != "=":
                    return Parser.error(Diagnostic.expected(describe("="), cursor))
                cursor.step()
                base64.write_quantum(sink, p, q, r, c)
                return Parser.done(sink.bind())
            elif cursor.is_done():
                return Parser.error(Diagnostic.expected(describe("="), cursor))
        break

    if cursor.is_error():
        return Parser.error(Diagnostic.from_error(cursor))
    return Base64Parser(base64=base64, sink=sink, p=p, q=q, r=r, step=step)
