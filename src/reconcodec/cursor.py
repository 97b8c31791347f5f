from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

from .spans import Mark

if TYPE_CHECKING:
    from .source import LineSource


class CursorState(str, Enum):
    EMPTY = "empty"  # nothing buffered, more may arrive
    CONT = "cont"  # at least one scalar available at index
    DONE = "done"  # no more input will ever arrive
    ERROR = "error"  # broken, carries the failure


@dataclass(slots=True)
class Cursor:
    """Forward-only view over one chunk of input.

    A cursor is transient: parsers step it while they run, then drop it. The
    caller builds the next cursor with `resume()` once more input arrives, so
    offset/line/column keep counting across chunks.
    """

    data: str = ""
    index: int = 0
    offset: int = 0
    line: int = 1
    column: int = 1
    id: str = "<memory>"
    last: bool = False
    error: BaseException | None = None
    source: LineSource | None = field(default=None, repr=False, compare=False)

    @classmethod
    def of(
        cls,
        text: str,
        *,
        id: str = "<memory>",
        last: bool = True,
        source: LineSource | None = None,
    ) -> Cursor:
        return cls(data=text, id=id, last=last, source=source)

    @classmethod
    def empty(cls, *, id: str = "<memory>", source: LineSource | None = None) -> Cursor:
        return cls(id=id, last=False, source=source)

    @property
    def state(self) -> CursorState:
        if self.error is not None:
            return CursorState.ERROR
        if self.index < len(self.data):
            return CursorState.CONT
        if self.last:
            return CursorState.DONE
        return CursorState.EMPTY

    def is_cont(self) -> bool:
        return self.error is None and self.index < len(self.data)

    def is_empty(self) -> bool:
        return self.error is None and self.index >= len(self.data) and not self.last

    def is_done(self) -> bool:
        return self.error is None and self.index >= len(self.data) and self.last

    def is_error(self) -> bool:
        return self.error is not None

    @property
    def head(self) -> str:
        if not self.is_cont():
            raise RuntimeError(f"cursor has no head in state {self.state.value}")
        return self.data[self.index]

    def step(self) -> None:
        if not self.is_cont():
            return
        ch = self.data[self.index]
        self.index += 1
        self.offset += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

    def mark(self, label: str | None = None) -> Mark:
        return Mark(offset=self.offset, line=self.line, column=self.column, label=label)

    def remaining(self) -> str:
        return self.data[self.index :]

    def resume(self, chunk: str = "", *, last: bool = False) -> Cursor:
        """Return a fresh cursor continuing where this one stopped."""
        return replace(self, data=self.data[self.index :] + chunk, index=0, last=last)

    def fail(self, error: BaseException) -> Cursor:
        return replace(self, error=error)
