from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .cursor import Cursor
from .diagnostic import Diagnostic
from .parser import Parser
from .sink import StringSink

# Integers must stay exactly representable as IEEE-754 doubles.
MAX_SAFE_INTEGER = 9007199254740992
MIN_SAFE_INTEGER = -9007199254740991

MAX_HEX_DIGITS = 16


class Uint32(int):
    """Hexadecimal literal of at most 8 digits."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Uint32(0x{int(self):08X})"


class Uint64(int):
    """Hexadecimal literal of 9 to 16 digits."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Uint64(0x{int(self):016X})"


def is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def is_space(c: str) -> bool:
    return c == " " or c == "\t"


def hex_value(c: str) -> int:
    """Return the nibble encoded by `c`, or -1 if it is not a hex digit."""
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "a" <= c <= "f":
        return ord(c) - ord("a") + 10
    if "A" <= c <= "F":
        return ord(c) - ord("A") + 10
    return -1


class NumberStep(Enum):
    LEADING = "leading"
    FIRST_DIGIT = "first_digit"
    DIGITS = "digits"
    SUFFIX = "suffix"


class DecimalStep(Enum):
    POINT = "point"
    FRACTION_FIRST = "fraction_first"
    FRACTION_REST = "fraction_rest"
    EXPONENT_SIGN = "exponent_sign"
    EXPONENT_FIRST = "exponent_first"
    EXPONENT_REST = "exponent_rest"


@dataclass(frozen=True, slots=True)
class NumberParser(Parser[int | float]):
    """Continuation of a Recon number literal.

    `NumberParser()` is the initial state. Integers finish as `int`, literals
    with a fraction or exponent finish as `float`, and `0x` literals finish as
    `Uint32` or `Uint64`.
    """

    decimal: bool = True
    hexadecimal: bool = True
    sign: int = 1
    value: int = 0
    step: NumberStep = NumberStep.LEADING

    def feed(self, cursor: Cursor) -> Parser[int | float]:
        return parse_number(
            cursor,
            decimal=self.decimal,
            hexadecimal=self.hexadecimal,
            sign=self.sign,
            value=self.value,
            step=self.step,
        )


@dataclass(frozen=True, slots=True)
class DecimalParser(Parser[float]):
    text: StringSink
    step: DecimalStep = DecimalStep.POINT

    def feed(self, cursor: Cursor) -> Parser[float]:
        return parse_decimal(cursor, self.text.clone(), self.step)


@dataclass(frozen=True, slots=True)
class HexadecimalParser(Parser[int]):
    value: int = 0
    size: int = 0

    def feed(self, cursor: Cursor) -> Parser[int]:
        return parse_hexadecimal(cursor, self.value, self.size)


def _render_integer(sign: int, value: int) -> str:
    if value == 0 and sign < 0:
        return "-0"
    return str(value)


def parse_number(
    cursor: Cursor,
    *,
    decimal: bool = True,
    hexadecimal: bool = True,
    sign: int = 1,
    value: int = 0,
    step: NumberStep = NumberStep.LEADING,
) -> Parser[int | float]:
    if step is NumberStep.LEADING:
        while cursor.is_cont() and is_space(cursor.head):
            cursor.step()
        if cursor.is_cont():
            if cursor.head == "-":
                cursor.step()
                sign = -1
            step = NumberStep.FIRST_DIGIT
        elif cursor.is_done():
            return Parser.error(Diagnostic.expected("number", cursor))

    if step is NumberStep.FIRST_DIGIT:
        if cursor.is_cont():
            c = cursor.head
            if c == "0":
                cursor.step()
                step = NumberStep.SUFFIX
            elif is_digit(c):
                cursor.step()
                value = sign * (ord(c) - ord("0"))
                step = NumberStep.DIGITS
            else:
                return Parser.error(Diagnostic.expected("digit", cursor))
        elif cursor.is_done():
            return Parser.error(Diagnostic.expected("digit", cursor))

    if step is NumberStep.DIGITS:
        while cursor.is_cont():
            c = cursor.head
            if not is_digit(c):
                break
            value = 10 * value + sign * (ord(c) - ord("0"))
            if value > MAX_SAFE_INTEGER or value < MIN_SAFE_INTEGER:
                return Parser.error(Diagnostic.message_at("integer overflow", cursor))
            cursor.step()
        if cursor.is_cont() or cursor.is_done():
            step = NumberStep.SUFFIX

    if step is NumberStep.SUFFIX:
        if cursor.is_cont():
            c = cursor.head
            if decimal and c in ".eE":
                text = StringSink([_render_integer(sign, value)])
                return parse_decimal(cursor, text, DecimalStep.POINT)
            if hexadecimal and c == "x" and value == 0 and sign > 0:
                cursor.step()
                return parse_hexadecimal(cursor, 0, 0)
            return Parser.done(value)
        if cursor.is_done():
            return Parser.done(value)

    if cursor.is_error():
        return Parser.error(Diagnostic.from_error(cursor))
    return NumberParser(decimal=decimal, hexadecimal=hexadecimal, sign=sign, value=value, step=step)


def parse_decimal(cursor: Cursor, text: StringSink, step: DecimalStep) -> Parser[float]:
    if step is DecimalStep.POINT:
        if cursor.is_cont():
            c = cursor.head
            if c == ".":
                cursor.step()
                text.write(c)
                step = DecimalStep.FRACTION_FIRST
            elif c == "e" or c == "E":
                cursor.step()
                text.write(c)
                step = DecimalStep.EXPONENT_SIGN
            else:
                return Parser.done(float(text.bind()))
        elif cursor.is_done():
            return Parser.done(float(text.bind()))

    if step is DecimalStep.FRACTION_FIRST:
        if cursor.is_cont():
            c = cursor.head
            if not is_digit(c):
                return Parser.error(Diagnostic.expected("digit", cursor))
            cursor.step()
            text.write(c)
            step = DecimalStep.FRACTION_REST
        elif cursor.is_done():
            return Parser.error(Diagnostic.expected("digit", cursor))

    if step is DecimalStep.FRACTION_REST:
        while cursor.is_cont() and is_digit(cursor.head):
            text.write(cursor.head)
            cursor.step()
        if cursor.is_cont():
            c = cursor.head
            if c == "e" or c == "E":
                cursor.step()
                text.write(c)
                step = DecimalStep.EXPONENT_SIGN
            else:
                return Parser.done(float(text.bind()))
        elif cursor.is_done():
            return Parser.done(float(text.bind()))

    if step is DecimalStep.EXPONENT_SIGN:
        if cursor.is_cont():
            c = cursor.head
            if c == "+" or c == "-":
                cursor.step()
                text.write(c)
            step = DecimalStep.EXPONENT_FIRST
        elif cursor.is_done():
            return Parser.error(Diagnostic.expected("digit", cursor))

    if step is DecimalStep.EXPONENT_FIRST:
        if cursor.is_cont():
            c = cursor.head
            if not is_digit(c):
                return Parser.error(Diagnostic.expected("digit", cursor))
            cursor.step()
            text.write(c)
            step = DecimalStep.EXPONENT_REST
        elif cursor.is_done():
            return Parser.error(Diagnostic.expected("digit", cursor))

    if step is DecimalStep.EXPONENT_REST:
        while cursor.is_cont() and is_digit(cursor.head):
            text.write(cursor.head)
            cursor.step()
        if cursor.is_cont() or cursor.is_done():
            return Parser.done(float(text.bind()))

    if cursor.is_error():
        return Parser.error(Diagnostic.from_error(cursor))
    return DecimalParser(text=text, step=step)


def parse_hexadecimal(cursor: Cursor, value: int = 0, size: int = 0) -> Parser[int]:
    while cursor.is_cont():
        nibble = hex_value(cursor.head)
        if nibble < 0:
            break
        if size == MAX_HEX_DIGITS:
            return Parser.error(Diagnostic.message_at("hexadecimal overflow", cursor))
        cursor.step()
        value = (value << 4) | nibble
        size += 1

    if cursor.is_cont() or cursor.is_done():
        if size == 0:
            return Parser.error(Diagnostic.expected("hex digit", cursor))
        if size <= 8:
            return Parser.done(Uint32(value))
        return Parser.done(Uint64(value))

    if cursor.is_error():
        return Parser.error(Diagnostic.from_error(cursor))
    return HexadecimalParser(value=value, size=size)
