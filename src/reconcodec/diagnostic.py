from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .severity import Severity
from .spans import Location, Mark

if TYPE_CHECKING:
    from .cursor import Cursor
    from .render import RenderSettings
    from .source import LineSource


def describe(ch: str) -> str:
    """Quote a scalar the way diagnostics print it."""
    return repr(ch)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Labeled failure at a location in a named input.

    Holds a reference to a line source instead of the text itself, so building
    one on a hot parse path costs nothing until it is rendered.
    """

    input_id: str
    location: Location
    severity: Severity = Severity.ERROR
    message: str | None = None
    note: str | None = None
    cause: Diagnostic | None = None
    source: LineSource | None = field(default=None, repr=False, compare=False)

    @property
    def start(self) -> Mark:
        return self.location.start

    @property
    def end(self) -> Mark:
        return self.location.end

    def chain(self) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        d: Diagnostic | None = self
        while d is not None:
            out.append(d)
            d = d.cause
        return out

    def with_cause(self, cause: Diagnostic | None) -> Diagnostic:
        return Diagnostic(
            input_id=self.input_id,
            location=self.location,
            severity=self.severity,
            message=self.message,
            note=self.note,
            cause=cause,
            source=self.source,
        )

    def render(
        self,
        *,
        settings: RenderSettings | None = None,
        sources: Mapping[str, LineSource] | None = None,
    ) -> str:
        from .render import render

        return render(self, settings=settings, sources=sources)

    def __str__(self) -> str:
        return self.render()

    @classmethod
    def message_at(
        cls,
        message: str,
        cursor: Cursor,
        *,
        severity: Severity = Severity.ERROR,
        note: str | None = None,
        cause: Diagnostic | None = None,
    ) -> Diagnostic:
        return cls(
            input_id=cursor.id,
            location=cursor.mark(),
            severity=severity,
            message=message,
            note=note,
            cause=cause,
            source=cursor.source,
        )

    @classmethod
    def unexpected(
        cls,
        cursor: Cursor,
        *,
        severity: Severity = Severity.ERROR,
        note: str | None = None,
        cause: Diagnostic | None = None,
    ) -> Diagnostic:
        if cursor.is_cont():
            message = f"unexpected {describe(cursor.head)}"
        else:
            message = "unexpected end of input"
        return cls.message_at(message, cursor, severity=severity, note=note, cause=cause)

    @classmethod
    def expected(
        cls,
        expected: str,
        cursor: Cursor,
        *,
        severity: Severity = Severity.ERROR,
        note: str | None = None,
        cause: Diagnostic | None = None,
    ) -> Diagnostic:
        found = describe(cursor.head) if cursor.is_cont() else "end of input"
        message = f"expected {expected}, but found {found}"
        return cls.message_at(message, cursor, severity=severity, note=note, cause=cause)

    @classmethod
    def from_error(cls, cursor: Cursor) -> Diagnostic:
        """Describe a cursor that broke while reading."""
        return cls.message_at(f"input error: {cursor.error}", cursor)
