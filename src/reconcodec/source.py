from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    """Re-acquires the text of a line for rendering.

    Lines are 1-based and split on "\\n" only, matching how `Cursor` counts them.
    Returned text carries no line terminator.
    """

    def line(self, number: int) -> str | None: ...


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


@dataclass(slots=True)
class TextSource:
    """A buffered copy of a whole input."""

    text: str
    _lines: list[str] | None = field(default=None, init=False, repr=False)

    def line(self, number: int) -> str | None:
        if self._lines is None:
            self._lines = _split_lines(self.text)
        if 1 <= number <= len(self._lines):
            return self._lines[number - 1]
        return None


@dataclass(slots=True)
class StreamSource:
    """Buffers chunks as they are fed so diagnostics can be rendered later."""

    chunks: list[str] = field(default_factory=list)
    _lines: list[str] | None = field(default=None, init=False, repr=False)

    def append(self, chunk: str) -> None:
        if chunk:
            self.chunks.append(chunk)
            self._lines = None

    def text(self) -> str:
        return "".join(self.chunks)

    def line(self, number: int) -> str | None:
        if self._lines is None:
            self._lines = _split_lines(self.text())
        if 1 <= number <= len(self._lines):
            return self._lines[number - 1]
        return None


@dataclass(slots=True)
class FileSource:
    """Re-reads a file from disk the first time a line is requested.

    Lines are split the same way the parse pass counts them: no newline
    translation, and undecodable bytes become U+FFFD so the excerpt still
    renders.
    """

    path: Path
    encoding: str = "utf-8"
    _lines: list[str] | None = field(default=None, init=False, repr=False, compare=False)

    def _load(self) -> list[str]:
        try:
            with self.path.open(encoding=self.encoding, errors="replace", newline="") as f:
                return _split_lines(f.read())
        except OSError as exc:
            logger.warning("cannot re-read %s for rendering: %s", self.path, exc)
            return []

    def line(self, number: int) -> str | None:
        if self._lines is None:
            self._lines = self._load()
        if 1 <= number <= len(self._lines):
            return self._lines[number - 1]
        return None
