from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .cursor import Cursor
from .diagnostic import Diagnostic
from .errors import ParseError

T = TypeVar("T")


class Parser(Generic[T]):
    """Resumable parse state.

    A parser is a continuation (needs more input), a finished value, or a
    terminal error. Continuations hold only scalar progress, never the cursor
    that produced them, and `feed` never mutates the receiver: it returns the
    next state.
    """

    __slots__ = ()

    def feed(self, cursor: Cursor) -> Parser[T]:
        raise NotImplementedError

    def is_cont(self) -> bool:
        return True

    def is_done(self) -> bool:
        return False

    def is_error(self) -> bool:
        return False

    def bind(self) -> T:
        raise RuntimeError(f"incomplete parse: {self!r}")

    def trap(self) -> Diagnostic:
        raise RuntimeError(f"parser is not in an error state: {self!r}")

    @staticmethod
    def done(value: T) -> Parser[T]:
        return Done(value)

    @staticmethod
    def error(diagnostic: Diagnostic) -> Parser[Any]:
        return Error(diagnostic)


@dataclass(frozen=True, slots=True)
class Done(Parser[T]):
    value: T

    def feed(self, cursor: Cursor) -> Parser[T]:
        return self

    def is_cont(self) -> bool:
        return False

    def is_done(self) -> bool:
        return True

    def bind(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Error(Parser[Any]):
    diagnostic: Diagnostic

    def feed(self, cursor: Cursor) -> Parser[Any]:
        return self

    def is_cont(self) -> bool:
        return False

    def is_error(self) -> bool:
        return True

    def bind(self) -> Any:
        raise ParseError(self.diagnostic)

    def trap(self) -> Diagnostic:
        return self.diagnostic
