"""rustc-style rendering of diagnostics.

The renderer never receives source text from the diagnostic. Each excerpt line
is re-acquired through a `LineSource`: first from the `sources` mapping passed
in by the caller, keyed by input id, then from the source the diagnostic was
created with. Lines that cannot be recovered render as empty text.

Layout of a single-line report::

    error: unexpected 'x'
     --> input:1:6
      |
    1 | -1234x
      |      ^
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .diagnostic import Diagnostic
from .source import LineSource
from .spans import Mark


@dataclass(frozen=True, slots=True)
class RenderSettings:
    # Lines shown after the first and before the last line of an elided span.
    # Spans covering more than 2 * context_lines + 3 lines are elided.
    context_lines: int = 2

    def __post_init__(self) -> None:
        if self.context_lines < 0:
            raise ValueError("context_lines must be >= 0")


DEFAULT_SETTINGS = RenderSettings()


def count_digits(n: int) -> int:
    return len(str(max(n, 0)))


def render(
    diagnostic: Diagnostic,
    *,
    settings: RenderSettings | None = None,
    sources: Mapping[str, LineSource] | None = None,
) -> str:
    """Render a diagnostic and its cause chain as newline separated text."""
    r = _Renderer(
        settings=settings or DEFAULT_SETTINGS,
        digits=max(count_digits(d.end.line) for d in diagnostic.chain()),
        sources=sources or {},
    )
    rows: list[str] = []
    d: Diagnostic | None = diagnostic
    while d is not None:
        if d.message is not None:
            rows.append(f"{d.severity.label}: {d.message}")
        rows.append(f"{' ' * r.digits}--> {d.input_id}:{d.start.line}:{d.start.column}")
        rows.append(r.lead)
        d = r.context(d, rows)
    return "\n".join(rows)


@dataclass(slots=True)
class _Renderer:
    settings: RenderSettings
    digits: int
    sources: Mapping[str, LineSource]

    @property
    def lead(self) -> str:
        return " " * (self.digits + 1) + "|"

    @property
    def separator(self) -> str:
        return "." * self.digits + "  "

    @property
    def ellipsis(self) -> str:
        return "." * self.digits + "   |"

    def context(self, d: Diagnostic, rows: list[str]) -> Diagnostic | None:
        """Append the excerpt of `d`, merging its cause when it shares the input.

        Returns the next diagnostic that needs a block of its own.
        """
        cause = d.cause
        if cause is None or cause.message is not None or cause.input_id != d.input_id:
            self.excerpt(d, rows)
            return cause
        if d.start.offset > cause.start.offset:
            following = self.context(cause, rows)
            rows.append(self.separator)
            self.excerpt(d, rows)
        else:
            self.excerpt(d, rows)
            rows.append(self.separator)
            following = self.context(cause, rows)
        return following

    def excerpt(self, d: Diagnostic, rows: list[str]) -> None:
        self.lines(d, rows)
        if d.note is not None:
            rows.append(self.lead)
            rows.append(f"{' ' * (self.digits + 1)}= note: {d.note}")

    def lines(self, d: Diagnostic, rows: list[str]) -> None:
        first = d.start.line
        last = d.end.line
        n = self.settings.context_lines
        source = self.sources.get(d.input_id) or d.source

        if last - first > 2 * n + 2:
            for line in range(first, first + n + 1):
                self.line(d, line, source, rows)
            rows.append(self.ellipsis)
            for line in range(last - n, last + 1):
                self.line(d, line, source, rows)
        else:
            for line in range(first, last + 1):
                self.line(d, line, source, rows)

    def line(self, d: Diagnostic, line: int, source: LineSource | None, rows: list[str]) -> None:
        start = d.start
        end = d.end
        text = (source.line(line) if source is not None else None) or ""
        number = f"{line:>{self.digits}} |"

        if start.line == line and end.line == line:
            width = max(1, end.column - start.column + 1)
            rows.append(f"{number} {text}")
            rows.append(f"{self.lead} {' ' * (start.column - 1)}{'^' * width}{_label(end)}")
        elif start.line == line:
            rows.append(f"{number}   {text}")
            rows.append(f"{self.lead}  {'_' * start.column}^{_label(start)}")
        elif end.line == line:
            rows.append(f"{number} | {text}")
            rows.append(f"{self.lead} |{'_' * end.column}^{_label(end)}")
        else:
            rows.append(f"{number} | {text}")


def _label(mark: Mark) -> str:
    if mark.label is None:
        return ""
    return f" {mark.label}"
