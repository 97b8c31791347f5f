from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class Sink(Protocol[T_co]):
    """Write-only accumulator a parser decodes into."""

    def write(self, scalar: int | str) -> None: ...

    def bind(self) -> T_co: ...

    def clone(self) -> Sink[T_co]: ...


@dataclass(slots=True)
class StringSink:
    parts: list[str] = field(default_factory=list)

    def write(self, scalar: int | str) -> None:
        self.parts.append(chr(scalar) if isinstance(scalar, int) else scalar)

    def bind(self) -> str:
        return "".join(self.parts)

    def clone(self) -> StringSink:
        return StringSink(parts=list(self.parts))


@dataclass(slots=True)
class BytesSink:
    buf: bytearray = field(default_factory=bytearray)

    def write(self, scalar: int | str) -> None:
        b = ord(scalar) if isinstance(scalar, str) else scalar
        self.buf.append(b & 0xFF)

    def bind(self) -> bytes:
        return bytes(self.buf)

    def clone(self) -> BytesSink:
        return BytesSink(buf=bytearray(self.buf))
