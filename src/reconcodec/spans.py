from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Mark:
    """A concrete source position, optionally labeled.

    Offsets are 0-based; line/column are 1-based for user-facing messages.
    """

    offset: int
    line: int
    column: int
    label: str | None = None

    @property
    def start(self) -> Mark:
        return self

    @property
    def end(self) -> Mark:
        return self

    def with_label(self, label: str | None) -> Mark:
        return Mark(offset=self.offset, line=self.line, column=self.column, label=label)

    def format(self, input_id: str) -> str:
        return f"{input_id}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Span:
    """Inclusive range [start, end] in a single input."""

    start: Mark
    end: Mark

    def __post_init__(self) -> None:
        if self.end.line < self.start.line:
            raise ValueError(f"span ends on line {self.end.line} before it starts on line {self.start.line}")

    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    def format(self, input_id: str) -> str:
        return self.start.format(input_id)


Location = Mark | Span
